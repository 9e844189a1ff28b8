"""
Module: builder.selection.config

Purpose:
    Configuration dataclass for the selection algorithm.
    Immutable configuration with validation on construction.

Key Classes:
    - SelectionConfig: Constraints for choosing exam questions
    - IncludePolicy: How include tags interact with sample quotas

Dependencies:
    - dataclasses (std)

Used By:
    - builder.selection.selector: Main selector
    - builder.config: BuilderConfig.selection_config()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet


class IncludePolicy(Enum):
    """
    Precedence between include tags and sample-tag quotas.

    Attributes:
        SAMPLE_BYPASS: Questions carrying a sample tag stay eligible even
            without an include tag. Quotas draw from the require/exclude
            filtered pool.
        STRICT: Include tags restrict everything; quotas draw only from
            questions that also carry an include tag.
    """

    SAMPLE_BYPASS = auto()
    STRICT = auto()


@dataclass(frozen=True)
class SelectionConfig:
    """
    Configuration for the selection algorithm (immutable).

    Attributes:
        count: Number of questions to generate
        include_tags: If non-empty, only questions with one of these tags
        exclude_tags: Questions with any of these tags never appear
        require_tags: If non-empty, a question needs one of these to survive
        sample_tags: Tag → minimum number of questions carrying it
            (declaration order is the draw order)
        avoid_ids: Question ids that must not be chosen
        include_policy: Include tags vs sample quotas precedence

    Invariants:
        - count > 0
        - every quota >= 0

    Example:
        >>> config = SelectionConfig(count=5, sample_tags={"hard": 2})
        >>> config.quota_total
        2
    """

    count: int
    include_tags: FrozenSet[str] = frozenset()
    exclude_tags: FrozenSet[str] = frozenset()
    require_tags: FrozenSet[str] = frozenset()
    sample_tags: Dict[str, int] = field(default_factory=dict)
    avoid_ids: FrozenSet[str] = frozenset()
    include_policy: IncludePolicy = IncludePolicy.SAMPLE_BYPASS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.count <= 0:
            raise ValueError(f"count must be positive: {self.count}")
        for tag, quota in self.sample_tags.items():
            if quota < 0:
                raise ValueError(f"quota for tag {tag!r} must be non-negative: {quota}")

        # Accept any iterable of strings for the tag/id sets
        for name in ("include_tags", "exclude_tags", "require_tags", "avoid_ids"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

    @property
    def quota_total(self) -> int:
        """Sum of all sample-tag quotas."""
        return sum(self.sample_tags.values())

    @property
    def sample_tag_set(self) -> FrozenSet[str]:
        """Sample tags as a set for efficient lookup."""
        return frozenset(self.sample_tags)
