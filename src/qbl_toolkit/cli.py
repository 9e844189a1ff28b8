"""
Module: cli

Purpose:
    Command line front end: `qbl [flags] bank_file...`. Turns flags into
    a BuilderConfig, runs the build and maps failures to exit codes.

Exit Codes:
    0  success
    1  load, validation or build error (each problem printed on its own line)
    2  usage error (reported by argparse)

Key Functions:
    - main(): Console script entry point
    - build_parser(): argparse parser
    - config_from_args(): Namespace → BuilderConfig

Dependencies:
    - argparse (std)
    - builder.controller: build_quiz

Used By:
    - `qbl` console script (pyproject.toml)
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from qbl_toolkit import __version__
from qbl_toolkit.builder.config import DEFAULT_TITLE, BuilderConfig
from qbl_toolkit.builder.controller import BuildError, build_quiz
from qbl_toolkit.builder.loading import BankLoadError
from qbl_toolkit.builder.output.formats import OutputFormat
from qbl_toolkit.builder.selection.config import IncludePolicy
from qbl_toolkit.builder.selection.ordering import QuestionOrder
from qbl_toolkit.core.validation import ValidationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1

_TAG_SPLIT_RE = re.compile(r"[,\s]+")


def split_tags(values: Optional[Iterable[str]]) -> List[str]:
    """
    Flatten repeated tag arguments.

    Example:
        >>> split_tags(["easy,hard", "unit1 unit2"])
        ['easy', 'hard', 'unit1', 'unit2']
    """
    tags: List[str] = []
    for value in values or []:
        tags.extend(tag for tag in _TAG_SPLIT_RE.split(value) if tag)
    return tags


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="qbl",
        description="Build quizzes and exams from QBL multiple-choice question banks.",
    )

    parser.add_argument("banks", nargs="+", type=Path, metavar="bank_file",
                        help="QBL question bank file(s), loaded in order")

    # Output
    parser.add_argument("-o", "--output", type=Path,
                        help="Output file (default: stdout; web output needs a file)")
    parser.add_argument("-t", "--title", default=DEFAULT_TITLE, help="Document title")
    parser.add_argument("-c", "--compressed", action="store_true",
                        help="Compact choice layout (GradeScope)")

    formats = parser.add_argument_group("output format (default: from output extension, else qbl)")
    formats.add_argument("-q", "--qbl", dest="formats", action="append_const",
                         const=OutputFormat.QBL, help="Normalized QBL bank")
    formats.add_argument("-d", "--d2l", dest="formats", action="append_const",
                         const=OutputFormat.D2L, help="D2L / Brightspace CSV")
    formats.add_argument("-G", "--gradescope", dest="formats", action="append_const",
                         const=OutputFormat.GRADESCOPE, help="GradeScope LaTeX (exam class)")
    formats.add_argument("-l", "--latex", dest="formats", action="append_const",
                         const=OutputFormat.LATEX, help="Plain LaTeX with answer key")
    formats.add_argument("-w", "--web", dest="formats", action="append_const",
                         const=OutputFormat.WEB, help="HTML/JS/CSS web quiz")
    formats.add_argument("-D", "--debug", dest="formats", action="append_const",
                         const=OutputFormat.DEBUG, help="Settings and parsed question dump")

    # Generation
    generation = parser.add_argument_group("generation")
    generation.add_argument("-g", "--generate", type=_positive_int, metavar="N",
                            help="Choose N questions at random")
    generation.add_argument("-S", "--seed", type=int, help="Random seed (default: fresh, logged)")
    generation.add_argument("-O", "--order", choices=["random", "id", "alpha"],
                            help="Question order (default: random when generating, else bank order)")
    generation.add_argument("-i", "--include", action="append", metavar="TAGS",
                            help="Only use questions with one of these tags")
    generation.add_argument("-r", "--require", action="append", metavar="TAGS",
                            help="Drop questions with none of these tags")
    generation.add_argument("-x", "--exclude", action="append", metavar="TAGS",
                            help="Drop questions with any of these tags")
    generation.add_argument("-s", "--sample", action="append", nargs=2, metavar=("TAGS", "COUNT"),
                            help="Choose at least COUNT questions with each tag")
    generation.add_argument("--strict-include", action="store_true",
                            help="Sample quotas also obey --include")

    # History
    history = parser.add_argument_group("history")
    history.add_argument("-L", "--log", type=Path, metavar="FILE",
                         help="Write the ids of the output questions to FILE")
    history.add_argument("-a", "--avoid", action="append", type=Path, metavar="FILE",
                         help="Never generate questions whose ids are listed in FILE")

    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _sample_quotas(parser: argparse.ArgumentParser, pairs: Optional[Sequence[Sequence[str]]]) -> Dict[str, int]:
    """Merge repeated -s TAGS COUNT pairs; quotas for one tag add up."""
    quotas: Dict[str, int] = {}
    for tags, count in pairs or []:
        try:
            quota = int(count)
        except ValueError:
            parser.error(f"argument -s/--sample: COUNT must be an integer: {count!r}")
        if quota < 0:
            parser.error(f"argument -s/--sample: COUNT must be non-negative: {quota}")
        names = split_tags([tags])
        if not names:
            parser.error("argument -s/--sample: no tags given")
        for tag in names:
            quotas[tag] = quotas.get(tag, 0) + quota
    return quotas


def _output_format(formats: Optional[List[OutputFormat]]) -> Optional[OutputFormat]:
    if not formats:
        return None
    if len(set(formats)) > 1:
        logger.warning(
            f"Several output formats given; using the last ({formats[-1].value})"
        )
    return formats[-1]


def config_from_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> BuilderConfig:
    """
    Translate parsed arguments into a BuilderConfig.

    Usage problems that argparse cannot see (bad sample counts,
    contradictory settings) are reported through parser.error().
    """
    def tag_set(values: Optional[List[str]]) -> FrozenSet[str]:
        return frozenset(split_tags(values))

    sample_tags = _sample_quotas(parser, args.sample)
    if args.generate is None and (sample_tags or args.include or args.require or args.exclude):
        logger.warning("Tag options only apply when generating questions (-g N)")

    try:
        return BuilderConfig(
            bank_paths=tuple(args.banks),
            output_format=_output_format(args.formats),
            output_path=args.output,
            title=args.title,
            order=QuestionOrder.parse(args.order) if args.order else None,
            compressed=args.compressed,
            seed=args.seed,
            generate_count=args.generate or 0,
            include_tags=tag_set(args.include),
            exclude_tags=tag_set(args.exclude),
            require_tags=tag_set(args.require),
            sample_tags=sample_tags,
            include_policy=(
                IncludePolicy.STRICT if args.strict_include else IncludePolicy.SAMPLE_BYPASS
            ),
            avoid_paths=tuple(args.avoid or ()),
            log_path=args.log,
        )
    except ValueError as e:
        parser.error(str(e))


def _report(error: BuildError) -> None:
    """Print a build failure, one line per underlying problem."""
    print(f"error: {error}", file=sys.stderr)
    cause = error.__cause__
    if isinstance(cause, BankLoadError):
        details = cause.errors
    elif isinstance(cause, ValidationError):
        details = cause.errors
    else:
        details = []
    for detail in details:
        print(f"  {detail}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Console script entry point.

    Args:
        argv: Arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    config = config_from_args(args, parser)
    try:
        build_quiz(config)
    except BuildError as e:
        _report(e)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
