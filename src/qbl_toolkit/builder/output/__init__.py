"""
Module: builder.output

Purpose:
    Renderers for the final question sequence. Each takes a read-only
    sequence of questions plus text sinks; none of them change the
    sequence or run selection/ordering.

Key Functions:
    - render_qbl(): Normalized bank text
    - render_d2l(): D2L / Brightspace CSV
    - render_gradescope(): exam-class LaTeX
    - render_latex(): Plain LaTeX
    - render_web(): HTML + JS + CSS quiz
    - render_debug(): Settings and question dump

Used By:
    - builder.controller: Pipeline orchestration
"""

from .formats import OutputFormat
from .qbl import format_question, render_qbl
from .d2l import render_d2l
from .latex import render_gradescope, render_latex
from .web import render_web
from .debug import render_debug

__all__ = [
    "OutputFormat",
    "format_question",
    "render_qbl",
    "render_d2l",
    "render_gradescope",
    "render_latex",
    "render_web",
    "render_debug",
]
