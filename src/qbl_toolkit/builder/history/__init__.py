"""
Module: builder.history

Purpose:
    Question id logs and avoid files, so successive generated exams can
    avoid repeating questions.
"""

from .id_log import log_questions, load_avoid_file, load_avoid_files

__all__ = [
    "log_questions",
    "load_avoid_file",
    "load_avoid_files",
]
