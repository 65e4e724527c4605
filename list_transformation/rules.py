"""
Deterministic transformation rules.

This file exists to keep the parsing heuristics and output conventions in one place.
"""

# Lines are split on LF or CRLF; output is always joined with LF.
LINE_BREAK_PATTERN = r"\r?\n"
OUTPUT_NEWLINE = "\n"

ITEM_SEPARATOR = ", "

SORT_ORDERS = ("ASC", "DESC")
DEFAULT_SORT_ORDER = "ASC"

SQL_DIALECTS = ("mysql", "sqlserver", "other")
DEFAULT_SQL_DIALECT = "mysql"

DEFAULT_SQL_CONJUNCTION = "OR"

SQL_LIKE_MISSING_INPUT = (
    "You must provide a column key, select a valid database type, "
    "and choose a conjunction for the SQL LIKE command."
)
