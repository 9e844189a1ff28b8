"""
Module: builder.controller

Purpose:
    Orchestrate the complete quiz building pipeline.
    Load → Validate → Generate → Order → Log → Render

Key Functions:
    - build_quiz(): Main entry point for building a quiz

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - builder.loading: Bank loading
    - builder.selection: Question selection and ordering
    - builder.history: ID log / avoid files
    - builder.output: Renderers

Used By:
    - qbl_toolkit.cli: Command line front end
"""

from __future__ import annotations

import logging
import random
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from qbl_toolkit.core.models import Question
from qbl_toolkit.core.models.selection import SelectionResult
from qbl_toolkit.core.validation import ValidationError

from .config import BuilderConfig
from .history import load_avoid_files, log_questions
from .loading import BankLoadError, LoaderError, load_bank
from .output import (
    OutputFormat,
    render_d2l,
    render_debug,
    render_gradescope,
    render_latex,
    render_qbl,
    render_web,
)

logger = logging.getLogger(__name__)

SEED_BITS = 32


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        questions: Final question sequence, as rendered
        selection: Selection result (None when the whole bank was used)
        output_paths: Files written (empty when writing to a stream)
        seed: Seed of the run's random source (reuse it to reproduce)
        warnings: Selection shortfalls and other non-fatal conditions

    Example:
        >>> result = build_quiz(config)
        >>> print(f"Wrote {len(result.questions)} questions with seed {result.seed}")
    """
    questions: Tuple[Question, ...]
    selection: Optional[SelectionResult]
    output_paths: Tuple[Path, ...]
    seed: int
    warnings: Tuple[str, ...]


def build_quiz(config: BuilderConfig, stdout: Optional[TextIO] = None) -> BuildResult:
    """
    Build a quiz from start to finish.

    Pipeline:
    1. Load bank files
    2. Validate the pool
    3. Seed the shared random source
    4. (Optional) Read avoid files and generate a subset
    5. Order the final sequence
    6. (Optional) Log the output ids
    7. Render

    Args:
        config: Build configuration
        stdout: Stream used when config.output_path is None
            (default: sys.stdout)

    Returns:
        BuildResult with the rendered questions and paths

    Raises:
        BuildError: If any step fails

    Example:
        >>> config = BuilderConfig(
        ...     bank_paths=(Path("unit1.qbl"),),
        ...     output_path=Path("out/quiz.tex"),
        ...     generate_count=10,
        ...     seed=42,
        ... )
        >>> result = build_quiz(config)
    """
    warnings: List[str] = []
    start_time = time.perf_counter()
    output_format = config.resolved_format

    if output_format is OutputFormat.WEB and config.output_path is None:
        raise BuildError("Web output needs an output file (it writes .html, .js and .css)")

    # 1. Load
    try:
        bank = load_bank(config.bank_paths)
    except LoaderError as e:
        raise BuildError(f"Failed to load question bank: {e}") from e
    except BankLoadError as e:
        raise BuildError(f"Failed to parse question bank: {e}") from e

    if not len(bank):
        raise BuildError(
            "No questions found in " + ", ".join(str(p) for p in config.bank_paths)
        )

    # 2. Validate
    try:
        bank.validate()
    except ValidationError as e:
        raise BuildError(f"Question bank is invalid: {e}") from e

    # 3. Shared random source: selection draws first, ordering second
    seed = config.seed if config.seed is not None else _fresh_seed()
    rng = random.Random(seed)

    # 4. Generate
    selection = None
    if config.generates:
        try:
            avoid_ids = load_avoid_files(config.avoid_paths)
        except LoaderError as e:
            raise BuildError(f"Failed to read avoid file: {e}") from e

        selection = bank.generate(config.selection_config(avoid_ids), rng)
        warnings.extend(str(w) for w in selection.warnings)
        logger.info(
            f"Generated {selection.question_count}/{config.generate_count} questions "
            f"from {selection.eligible_count} eligible"
        )
    elif config.avoid_paths:
        warning = "Avoid files are only used when generating questions; ignored"
        logger.warning(warning)
        warnings.append(warning)

    # 5. Order
    order = config.effective_order
    bank.order(order, rng)
    questions = bank.questions
    logger.debug(f"Ordered {len(questions)} questions ({order.name.lower()})")

    # 6. Log ids
    if config.log_path is not None:
        try:
            log_questions(bank.question_ids, config.log_path)
        except OSError as e:
            raise BuildError(f"Failed to write id log {config.log_path}: {e}") from e

    # 7. Render
    try:
        output_paths = _render(questions, config, output_format, seed, stdout)
    except OSError as e:
        raise BuildError(f"Failed to write output: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Wrote {len(questions)} questions as {output_format.value} "
        f"in {elapsed:.2f}s"
    )

    return BuildResult(
        questions=questions,
        selection=selection,
        output_paths=output_paths,
        seed=seed,
        warnings=tuple(warnings),
    )


def _fresh_seed() -> int:
    """Draw a seed from the OS and log it so the run can be repeated."""
    seed = random.SystemRandom().getrandbits(SEED_BITS)
    logger.info(f"Using random seed {seed} (pass --seed {seed} to reproduce)")
    return seed


def _render(
    questions: Tuple[Question, ...],
    config: BuilderConfig,
    output_format: OutputFormat,
    seed: int,
    stdout: Optional[TextIO],
) -> Tuple[Path, ...]:
    """
    Write questions in the chosen format.

    Returns:
        Paths written (empty when writing to a stream)
    """
    if output_format is OutputFormat.WEB:
        return _render_web_files(questions, config)

    if config.output_path is None:
        _render_stream(questions, config, output_format, seed, stdout or sys.stdout)
        return ()

    path = config.output_path
    path.parent.mkdir(parents=True, exist_ok=True)
    # csv writes its own line endings
    newline = "" if output_format is OutputFormat.D2L else None
    with open(path, "w", encoding="utf-8", newline=newline) as out:
        _render_stream(questions, config, output_format, seed, out)
    logger.info(f"Wrote {path}")
    return (path,)


def _render_stream(
    questions: Tuple[Question, ...],
    config: BuilderConfig,
    output_format: OutputFormat,
    seed: int,
    out: TextIO,
) -> None:
    """Dispatch to the single-stream renderers."""
    if output_format is OutputFormat.QBL:
        render_qbl(questions, out)
    elif output_format is OutputFormat.D2L:
        render_d2l(questions, out)
    elif output_format is OutputFormat.GRADESCOPE:
        render_gradescope(questions, out, title=config.title, compressed=config.compressed)
    elif output_format is OutputFormat.LATEX:
        render_latex(questions, out, title=config.title)
    elif output_format is OutputFormat.DEBUG:
        settings = config.describe()
        settings["seed"] = seed
        render_debug(questions, out, settings=settings)
    else:
        raise BuildError(f"Format {output_format.value} cannot be written to a single stream")


def _render_web_files(questions: Tuple[Question, ...], config: BuilderConfig) -> Tuple[Path, ...]:
    """
    Write <stem>.html, <stem>.js and <stem>.css beside each other.

    Example:
        out/quiz.html → out/quiz.html, out/quiz.js, out/quiz.css
    """
    directory = config.output_path.parent
    base_name = config.output_path.stem
    directory.mkdir(parents=True, exist_ok=True)

    html_path = directory / f"{base_name}.html"
    js_path = directory / f"{base_name}.js"
    css_path = directory / f"{base_name}.css"

    with open(html_path, "w", encoding="utf-8") as html_out, \
            open(js_path, "w", encoding="utf-8") as js_out, \
            open(css_path, "w", encoding="utf-8") as css_out:
        render_web(
            questions,
            html_out,
            js_out,
            css_out,
            title=config.title,
            base_name=base_name,
        )

    logger.info(f"Wrote {html_path} (+ .js, .css)")
    return (html_path, js_path, css_path)
