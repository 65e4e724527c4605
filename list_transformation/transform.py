"""
Core list transformations.

Responsibilities:
- ordering + cleaning a list of lines
- first-occurrence dedupe
- joining lines into (quoted) comma-separated values
- splitting comma-separated values back into lines
- generating SQL LIKE clauses per dialect

Every transformation is a pure function of (input, configuration).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import TransformationConfigError
from .rules import (
    DEFAULT_SORT_ORDER,
    DEFAULT_SQL_CONJUNCTION,
    DEFAULT_SQL_DIALECT,
    ITEM_SEPARATOR,
    LINE_BREAK_PATTERN,
    OUTPUT_NEWLINE,
    SORT_ORDERS,
)

_LINE_BREAK = re.compile(LINE_BREAK_PATTERN)
_SURROUNDING_QUOTES = re.compile(r"^['\"]+|['\"]+\Z")
_TRAILING_COMMA = re.compile(r",\s*\Z")
# Whitespace as trimmed by editors, BOM included.
_SURROUNDING_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+\Z")

# One bare token per line, optionally followed by a single comma.
_LINE_SEPARATED_ITEM = re.compile(r"[^'\",\r\n]+,?")
# A quoted span or a bare run, followed by a comma or the end of the input.
# Escaped quotes inside a quoted span and multi-line quoted fields are not supported.
_CSV_TOKEN = re.compile(r"(\".*?\"|'.*?'|[^\"',\s]+)(?=\s*,|\s*\Z)")


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def join_lines(lines: List[str]) -> str:
    # A line ending in a lone CR is followed by CRLF so splitting the output gives the same lines back.
    parts = []
    for line in lines[:-1]:
        parts.append(line + ("\r\n" if line.endswith("\r") else OUTPUT_NEWLINE))
    parts.extend(lines[-1:])
    return "".join(parts)


def trim(value: str) -> str:
    return _SURROUNDING_SPACE.sub("", value)


def sanitize_line(line: str) -> str:
    """Strip surrounding quote characters, then surrounding whitespace."""
    return trim(_SURROUNDING_QUOTES.sub("", line))


def _strip_trailing_comma(line: str) -> str:
    return _TRAILING_COMMA.sub("", line)


def _escape_literal(value: str) -> str:
    return value.replace("'", "''")


def _clean_items(text: str) -> List[str]:
    # Only exact-empty lines are dropped; whitespace-only lines become empty items.
    return [sanitize_line(_strip_trailing_comma(line)) for line in split_lines(text) if line]


class Command(str, Enum):
    """Commands offered on the palette, in registration order."""

    ORDER_AND_CLEAN_LIST = "orderAndCleanList"
    TO_COMMA_SEPARATED = "toCommaSeparated"
    TO_QUOTED_COMMA_SEPARATED = "toQuotedCommaSeparated"
    FROM_COMMA_SEPARATED_TO_LINES = "fromCommaSeparatedToLines"
    LIST_TO_SQL_LIKE = "listToSqlLike"
    REMOVE_DUPLICATES_ON_LIST = "removeDuplicatesOnList"

    @property
    def title(self) -> str:
        return COMMAND_TITLES[self]


COMMAND_TITLES: Dict[Command, str] = {
    Command.ORDER_AND_CLEAN_LIST: "LIST: Order and Clean List",
    Command.TO_COMMA_SEPARATED: "LIST: Convert to Comma Separated Values",
    Command.TO_QUOTED_COMMA_SEPARATED: "LIST: Convert to Quoted Comma Separated Values",
    Command.FROM_COMMA_SEPARATED_TO_LINES: "LIST: Convert Comma Separated Values to Lines",
    Command.LIST_TO_SQL_LIKE: "LIST: Convert List to SQL LIKE Clauses",
    Command.REMOVE_DUPLICATES_ON_LIST: "LIST: Remove Duplicates",
}


class TextTransformation:
    """Common capability shared by every variant."""

    def transform(self, text: str) -> str:
        raise NotImplementedError("Method not implemented.")


@dataclass(frozen=True)
class OrderAndCleanList(TextTransformation):
    order: str = DEFAULT_SORT_ORDER

    def transform(self, text: str, order: str | None = None) -> str:
        """
        Drop blank lines, sanitize the rest and sort them.

        Sorting is ordinal (code point). Any order other than "DESC" sorts ascending.
        """
        lines = sorted(sanitize_line(line) for line in split_lines(text) if trim(line))
        if (order or self.order) == "DESC":
            lines.reverse()
        return OUTPUT_NEWLINE.join(lines)


@dataclass(frozen=True)
class RemoveDuplicates(TextTransformation):
    def transform(self, text: str) -> str:
        # Raw lines compare exactly; dict keeps first-insertion order.
        return join_lines(list(dict.fromkeys(split_lines(text))))


@dataclass(frozen=True)
class ToCommaSeparated(TextTransformation):
    def transform(self, text: str) -> str:
        return ITEM_SEPARATOR.join(_clean_items(text))


@dataclass(frozen=True)
class ToQuotedCommaSeparated(TextTransformation):
    def transform(self, text: str) -> str:
        return ITEM_SEPARATOR.join(f"'{item}'" for item in _clean_items(text))


@dataclass(frozen=True)
class CommaSeparatedToLines(TextTransformation):
    def transform(self, text: str) -> str:
        """
        Split a comma-separated line into one item per line.

        Input that already looks like one item per line is returned untouched.
        """
        if all(_LINE_SEPARATED_ITEM.fullmatch(line) for line in split_lines(text)):
            return text

        items = _CSV_TOKEN.findall(text)
        return OUTPUT_NEWLINE.join(trim(item) for item in items)


@dataclass(frozen=True)
class ToSqlLike(TextTransformation):
    column: str
    dialect: str = DEFAULT_SQL_DIALECT
    conjunction: str = DEFAULT_SQL_CONJUNCTION

    def quote_column(self) -> str:
        if self.dialect == "mysql":
            return f"`{self.column}`"
        if self.dialect == "sqlserver":
            return f"[{self.column}]"
        if self.dialect == "other":
            return f'"{self.column}"'
        raise TransformationConfigError(f"Unsupported database type: {self.dialect}")

    def transform(self, text: str) -> str:
        clauses = [
            f"{self.quote_column()} LIKE '%{_escape_literal(item)}%'"
            for item in _clean_items(text)
        ]
        return f" {self.conjunction}{OUTPUT_NEWLINE}".join(clauses)


_VARIANTS = {
    Command.ORDER_AND_CLEAN_LIST: OrderAndCleanList,
    Command.TO_COMMA_SEPARATED: ToCommaSeparated,
    Command.TO_QUOTED_COMMA_SEPARATED: ToQuotedCommaSeparated,
    Command.FROM_COMMA_SEPARATED_TO_LINES: CommaSeparatedToLines,
    Command.LIST_TO_SQL_LIKE: ToSqlLike,
    Command.REMOVE_DUPLICATES_ON_LIST: RemoveDuplicates,
}

_OPTIONS = {
    Command.ORDER_AND_CLEAN_LIST: ("order",),
    Command.LIST_TO_SQL_LIKE: ("column", "dialect", "conjunction"),
}


def create_transformation(command: Command | str, **options: Any) -> TextTransformation:
    """
    Build the configured variant for a command.

    Options the variant does not take, or that are None, are ignored so callers
    can pass a whole request's worth of parameters.
    """
    command = Command(command)
    kwargs = {
        name: options[name]
        for name in _OPTIONS.get(command, ())
        if options.get(name) is not None
    }
    if kwargs.get("order", DEFAULT_SORT_ORDER) not in SORT_ORDERS:
        raise TransformationConfigError(f"Unsupported sort order: {kwargs['order']}")
    return _VARIANTS[command](**kwargs)
