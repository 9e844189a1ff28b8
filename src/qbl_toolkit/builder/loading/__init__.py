"""
Module: builder.loading

Purpose:
    Bank file loading and parsing. Turns QBL text into Question records
    held by a Bank.

Key Functions:
    - load_bank(): Load several bank files into one pool
    - parse_text(): Parse bank text held in memory

Dependencies:
    - qbl_toolkit.core.models: Question, Bank

Used By:
    - builder.controller: Main build controller
"""

from .loader import load_bank, load_bank_file, LoaderError, BankLoadError
from .parser import BankParser, ParseError, parse_text, strip_comments

__all__ = [
    "load_bank",
    "load_bank_file",
    "LoaderError",
    "BankLoadError",
    "BankParser",
    "ParseError",
    "parse_text",
    "strip_comments",
]
