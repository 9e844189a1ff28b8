"""
Module: builder.selection.selector

Purpose:
    Main question selection algorithm. Chooses a fixed number of
    questions from the validated pool under tag constraints, using a
    caller-supplied seeded random source.

Key Functions:
    - select_questions(): Main entry point for selection

Key Classes:
    - Selector: Orchestrates the selection algorithm

Algorithm:
    1. Filter the pool to the eligible set
       (avoid ids → exclude tags → require tags → include tags)
    2. Index eligible questions by tag
    3. Draw sample-tag quotas, in declaration order
    4. Fill remaining slots uniformly from eligible minus chosen
    5. Return SelectionResult with any shortfall warnings

Determinism:
    Every random draw goes through the injected rng in a fixed order
    over lists kept in pool order, so a fixed seed, pool and config
    always give the same result.

Dependencies:
    - qbl_toolkit.core.models: Question, SelectionResult, warnings
    - builder.selection.config: SelectionConfig

Used By:
    - core.models.bank.Bank.generate
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from qbl_toolkit.core.models import Question
from qbl_toolkit.core.models.selection import (
    InsufficientPool,
    QuotaUnmet,
    SelectionResult,
    SelectionWarning,
)

from .config import IncludePolicy, SelectionConfig

logger = logging.getLogger(__name__)


def select_questions(
    questions: Iterable[Question],
    config: SelectionConfig,
    rng: random.Random,
) -> SelectionResult:
    """
    Select questions under tag constraints.

    Main entry point for the selection algorithm.

    Args:
        questions: Validated pool, in bank order
        config: Selection constraints
        rng: Seeded random source shared with later ordering

    Returns:
        SelectionResult with chosen questions (quota draws first, then
        fill draws) and any QuotaUnmet / InsufficientPool warnings

    Invariants:
        - len(result.questions) <= config.count
        - No question in config.avoid_ids or carrying an exclude tag

    Example:
        >>> result = select_questions(bank.questions, SelectionConfig(count=5), random.Random(42))
        >>> result.question_count
        5
    """
    selector = Selector(list(questions), config, rng)
    return selector.run()


@dataclass
class Selector:
    """
    Question selection orchestrator.

    Attributes:
        questions: Available questions
        config: Selection configuration
        rng: Shared seeded random source
    """

    questions: List[Question]
    config: SelectionConfig
    rng: random.Random

    # Internal state
    _eligible: List[Question] = field(init=False, default_factory=list)
    _tag_index: Dict[str, List[Question]] = field(init=False, default_factory=dict)
    _selected: List[Question] = field(init=False, default_factory=list)
    _used_ids: Set[str] = field(init=False, default_factory=set)
    _warnings: List[SelectionWarning] = field(init=False, default_factory=list)

    def run(self) -> SelectionResult:
        """
        Execute the selection algorithm.

        Returns:
            SelectionResult with selected questions
        """
        self._selected = []
        self._used_ids = set()
        self._warnings = []

        # Step 1: Eligible set
        self._filter_eligible()

        # Step 2: Tag index
        self._build_tag_index()

        # Step 3: Sample-tag quotas
        if self.config.sample_tags:
            self._fill_quotas()

        # Step 4: Uniform fill
        self._fill_remaining()

        logger.info(
            f"Selected {len(self._selected)}/{self.config.count} questions "
            f"from {len(self._eligible)} eligible"
        )
        return self._build_result()

    # ─────────────────────────────────────────────────────────────────────────
    # Step 1: Filtering
    # ─────────────────────────────────────────────────────────────────────────

    def _passes_hard_filters(self, question: Question) -> bool:
        """Avoid list, exclude tags and require tags; no exceptions."""
        config = self.config
        if question.id in config.avoid_ids:
            return False
        if question.has_any_tag(config.exclude_tags):
            return False
        if config.require_tags and not question.has_any_tag(config.require_tags):
            return False
        return True

    def _filter_eligible(self) -> None:
        """Reduce the pool to the questions selection may draw from."""
        config = self.config
        base = [q for q in self.questions if self._passes_hard_filters(q)]

        if config.include_tags:
            bypass = config.include_policy is IncludePolicy.SAMPLE_BYPASS
            sample_tags = config.sample_tag_set
            self._eligible = [
                q for q in base
                if q.has_any_tag(config.include_tags)
                or (bypass and q.has_any_tag(sample_tags))
            ]
        else:
            self._eligible = base

        logger.debug(
            f"Eligible: {len(self._eligible)}/{len(self.questions)} questions "
            f"({len(self.questions) - len(base)} removed by avoid/exclude/require, "
            f"{len(base) - len(self._eligible)} by include)"
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Step 2: Tag Index
    # ─────────────────────────────────────────────────────────────────────────

    def _build_tag_index(self) -> None:
        """Map each tag to the eligible questions carrying it, in pool order."""
        index: Dict[str, List[Question]] = defaultdict(list)
        for question in self._eligible:
            for tag in question.tags:
                index[tag].append(question)
        self._tag_index = dict(index)

    # ─────────────────────────────────────────────────────────────────────────
    # Step 3: Quotas
    # ─────────────────────────────────────────────────────────────────────────

    def _fill_quotas(self) -> None:
        """
        Draw enough questions for each sample tag.

        Questions already chosen for an earlier quota count toward later
        quotas they also satisfy; new draws come only from questions not
        yet chosen.
        """
        for tag, quota in self.config.sample_tags.items():
            if quota == 0:
                continue

            already = sum(1 for q in self._selected if tag in q.tags)
            needed = quota - already
            if needed <= 0:
                logger.debug(f"Quota for '{tag}' already met by earlier draws")
                continue

            candidates = [
                q for q in self._tag_index.get(tag, [])
                if q.id not in self._used_ids
            ]
            capacity = self.config.count - len(self._selected)
            take = min(needed, len(candidates), capacity)

            if take > 0:
                for question in self.rng.sample(candidates, take):
                    self._add_selection(question, reason=f"quota '{tag}'")

            if already + take < quota:
                self._warn(QuotaUnmet(
                    tag=tag,
                    requested=quota,
                    available=already + len(candidates),
                ))

    # ─────────────────────────────────────────────────────────────────────────
    # Step 4: Fill
    # ─────────────────────────────────────────────────────────────────────────

    def _fill_remaining(self) -> None:
        """Fill open slots uniformly, without replacement."""
        slots = self.config.count - len(self._selected)
        if slots <= 0:
            return

        remaining = [q for q in self._eligible if q.id not in self._used_ids]
        take = min(slots, len(remaining))
        if take > 0:
            for question in self.rng.sample(remaining, take):
                self._add_selection(question, reason="fill")

        if len(self._eligible) < self.config.count:
            self._warn(InsufficientPool(
                requested=self.config.count,
                available=len(self._eligible),
            ))

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _add_selection(self, question: Question, reason: str) -> None:
        self._selected.append(question)
        self._used_ids.add(question.id)
        logger.debug(f"Selected {question.id} ({reason})")

    def _warn(self, warning: SelectionWarning) -> None:
        self._warnings.append(warning)
        logger.warning(str(warning))

    def _build_result(self) -> SelectionResult:
        """Build final SelectionResult."""
        return SelectionResult(
            questions=tuple(self._selected),
            requested_count=self.config.count,
            eligible_count=len(self._eligible),
            warnings=tuple(self._warnings),
        )
