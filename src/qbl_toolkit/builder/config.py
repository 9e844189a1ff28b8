"""
Module: builder.config

Purpose:
    Configuration dataclass for the quiz building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuilderConfig: Main configuration for building a quiz

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - builder.controller: Main build controller
    - cli: Command line front end
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from qbl_toolkit.builder.output.formats import OutputFormat
from qbl_toolkit.builder.selection.config import IncludePolicy, SelectionConfig
from qbl_toolkit.builder.selection.ordering import QuestionOrder

DEFAULT_TITLE = "Multiple Choice Quiz"


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for building a quiz (immutable).

    Attributes:
        bank_paths: Bank files, in load order
        output_format: Explicit format (None: infer from output_path)
        output_path: Output file (None: write to stdout)
        title: Document title for LaTeX/GradeScope/web output
        order: Explicit ordering (None: see effective_order)
        seed: Random seed (None: draw a fresh one and log it)
        generate_count: Number of questions to generate (0: use whole bank)
        include_tags: Restrict generation to questions with one of these
        exclude_tags: Never generate questions with any of these
        require_tags: Generated questions need at least one of these
        sample_tags: Tag → minimum number of generated questions carrying it
        include_policy: Include tags vs sample quotas precedence
        avoid_paths: Files of previously used ids to avoid
        log_path: Where to write the ids of the output questions
        compressed: Compact choice layout (GradeScope output)

    Example:
        >>> config = BuilderConfig(
        ...     bank_paths=(Path("unit1.qbl"),),
        ...     output_path=Path("quiz.csv"),
        ...     generate_count=10,
        ...     seed=42,
        ... )
        >>> config.resolved_format
        <OutputFormat.D2L: 'd2l'>
    """

    # Required
    bank_paths: Tuple[Path, ...]

    # Output
    output_format: Optional[OutputFormat] = None
    output_path: Optional[Path] = None
    title: str = DEFAULT_TITLE
    order: Optional[QuestionOrder] = None
    compressed: bool = False

    # Generation
    seed: Optional[int] = None
    generate_count: int = 0
    include_tags: FrozenSet[str] = frozenset()
    exclude_tags: FrozenSet[str] = frozenset()
    require_tags: FrozenSet[str] = frozenset()
    sample_tags: Dict[str, int] = field(default_factory=dict)
    include_policy: IncludePolicy = IncludePolicy.SAMPLE_BYPASS

    # History
    avoid_paths: Tuple[Path, ...] = ()
    log_path: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "bank_paths", tuple(Path(p) for p in self.bank_paths))
        object.__setattr__(self, "avoid_paths", tuple(Path(p) for p in self.avoid_paths))
        for name in ("include_tags", "exclude_tags", "require_tags"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

        if not self.bank_paths:
            raise ValueError("at least one bank file is required")
        if self.generate_count < 0:
            raise ValueError(f"generate_count must be non-negative: {self.generate_count}")
        for tag, quota in self.sample_tags.items():
            if quota < 0:
                raise ValueError(f"quota for tag {tag!r} must be non-negative: {quota}")

    @property
    def generates(self) -> bool:
        """True when a random subset is requested."""
        return self.generate_count > 0

    @property
    def resolved_format(self) -> OutputFormat:
        """
        Format actually written.

        The explicit format wins; otherwise the output extension decides;
        otherwise QBL.
        """
        if self.output_format is not None:
            return self.output_format
        if self.output_path is not None:
            inferred = OutputFormat.from_extension(self.output_path.suffix)
            if inferred is not None:
                return inferred
        return OutputFormat.QBL

    @property
    def effective_order(self) -> QuestionOrder:
        """Explicit order, else RANDOM when generating, else DEFAULT."""
        if self.order is not None:
            return self.order
        return QuestionOrder.RANDOM if self.generates else QuestionOrder.DEFAULT

    def selection_config(self, avoid_ids: Iterable[str] = ()) -> SelectionConfig:
        """
        Derive the selection constraints for generation.

        Args:
            avoid_ids: Ids read from the avoid files

        Raises:
            ValueError: If no generation was requested
        """
        if not self.generates:
            raise ValueError("selection_config() needs generate_count > 0")
        return SelectionConfig(
            count=self.generate_count,
            include_tags=self.include_tags,
            exclude_tags=self.exclude_tags,
            require_tags=self.require_tags,
            sample_tags=dict(self.sample_tags),
            avoid_ids=frozenset(avoid_ids),
            include_policy=self.include_policy,
        )

    def describe(self) -> Dict[str, object]:
        """Settings as name → value pairs, for the debug dump."""
        return {
            "bank files": ", ".join(str(p) for p in self.bank_paths),
            "output format": self.resolved_format.value,
            "output file": self.output_path or "<stdout>",
            "title": self.title,
            "order": self.effective_order.name.lower(),
            "seed": self.seed,
            "generate": self.generate_count,
            "include": ", ".join(sorted(self.include_tags)),
            "exclude": ", ".join(sorted(self.exclude_tags)),
            "require": ", ".join(sorted(self.require_tags)),
            "sample": ", ".join(f"{tag}={n}" for tag, n in self.sample_tags.items()),
            "avoid files": ", ".join(str(p) for p in self.avoid_paths),
            "log file": self.log_path or "",
        }
