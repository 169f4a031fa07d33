"""Compiler error types and source excerpts for error reports."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Tuple, TypeVar, Union

from .lines_table import LinesTable
from .span import Spanned
from .tokens import Token

E = TypeVar("E")


class ErrorType(ABC):
    """An error that can name its category and sub-category."""

    @abstractmethod
    def error_type(self) -> str:
        """Return the broad category of the error."""

    @abstractmethod
    def error_sub_type(self) -> str:
        """Return the specific kind of error within its category."""


@dataclass
class ErrorMessage(Generic[E]):
    """A spanned error together with what is needed to show it in context."""

    error: Spanned[E]
    lines_table: LinesTable
    file_path: Union[Path, str]

    def __post_init__(self) -> None:
        self.file_path = Path(self.file_path)

    def extract_code_snippet(self, lines_before: int) -> Tuple[str, int]:
        """Return the source lines ending at the error's line and the first line's number.

        Up to ``lines_before`` lines before the error line are included. A single
        trailing newline is dropped. Raise OSError if the file cannot be read,
        is shorter than the table claims, or is not valid UTF-8.
        """
        err_line = self.lines_table.line(self.error.span.start)
        start_offset = self.lines_table.offset(err_line - lines_before)
        if start_offset is None:
            start_offset = 0

        with open(self.file_path, "rb") as handle:
            end_offset = self.lines_table.offset(err_line + 1)
            if end_offset is None:
                end_offset = os.fstat(handle.fileno()).st_size
            length = end_offset - start_offset
            if length < 0:
                raise OSError(f"invalid snippet range {start_offset}..{end_offset}")
            handle.seek(start_offset)
            data = handle.read(length)

        if len(data) < length:
            raise OSError(f"unexpected end of file while reading {self.file_path}")
        try:
            code = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OSError(f"{self.file_path} is not valid UTF-8") from exc

        if code.endswith("\n"):
            code = code[:-1]
        return code, self.lines_table.line(start_offset)


class ParseError(ErrorType, Exception):
    """An error found while building the syntax tree."""

    _sub_type = "ParseError"

    def error_type(self) -> str:
        return "ParseError"

    def error_sub_type(self) -> str:
        return self._sub_type


class UnexpectedToken(ParseError):
    """A token appeared where something else was expected."""

    _sub_type = "UnexpectedToken"

    def __init__(self, token: Token, expected: str) -> None:
        self.token = token
        self.expected = expected
        super().__init__(f"Unexpected token `{token}`, expected {expected}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnexpectedToken):
            return NotImplemented
        return (self.token, self.expected) == (other.token, other.expected)

    def __hash__(self) -> int:
        return hash((self.token, self.expected))

    def __repr__(self) -> str:
        return f"UnexpectedToken(token={self.token!r}, expected={self.expected!r})"


class UnexpectedEOF(ParseError):
    """The input ended where something else was expected."""

    _sub_type = "UnexpectedEOF"

    def __init__(self, expected: str) -> None:
        self.expected = expected
        super().__init__(f"Unexpected end of the file, expected {expected}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnexpectedEOF):
            return NotImplemented
        return self.expected == other.expected

    def __hash__(self) -> int:
        return hash(self.expected)

    def __repr__(self) -> str:
        return f"UnexpectedEOF(expected={self.expected!r})"