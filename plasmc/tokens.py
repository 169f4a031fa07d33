"""Lexical tokens of the Plasm language."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


def _variant_name(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


class Keyword(Enum):
    """Reserved words."""

    FN = "fn"
    LET = "let"
    RETURN = "return"

    def __str__(self) -> str:
        return self.value


class Bracket(Enum):
    """Opening and closing brackets."""

    ROUND_OPEN = "("
    ROUND_CLOSE = ")"
    CURLY_OPEN = "{"
    CURLY_CLOSE = "}"

    def __str__(self) -> str:
        return self.value


class SpecialSymbol(Enum):
    """Operators and punctuation."""

    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    DOUBLE_ASTERISK = "**"
    SLASH = "/"
    BACKSLASH = "\\"
    PERCENT = "%"
    AMPERSAND = "&"
    DOUBLE_AMPERSAND = "&&"
    PIPE = "|"
    DOUBLE_PIPE = "||"
    CARET = "^"
    TILDE = "~"
    EXCLAMATION = "!"
    EXCLAMATION_EQUALS = "!="
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    LESS_THAN = "<"
    DOUBLE_LESS_THAN = "<<"
    LESS_THAN_EQUALS = "<="
    GREATER_THAN = ">"
    DOUBLE_GREATER_THAN = ">>"
    GREATER_THAN_EQUALS = ">="
    COLON = ":"
    COMMA = ","

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Number:
    """A numeric literal kept as its source text."""

    text: str
    is_float: bool = False

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        kind = "Float" if self.is_float else "Integer"
        return f"{kind}({json.dumps(self.text)})"


class TokenKind(Enum):
    """The category a token belongs to."""

    KEYWORD = "keyword"
    BRACKET = "bracket"
    SPECIAL_SYMBOL = "special_symbol"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    NEW_LINE = "new_line"


_PAYLOAD_TYPES = {
    TokenKind.KEYWORD: Keyword,
    TokenKind.BRACKET: Bracket,
    TokenKind.SPECIAL_SYMBOL: SpecialSymbol,
    TokenKind.NUMBER: Number,
    TokenKind.IDENTIFIER: str,
    TokenKind.COMMENT: str,
    TokenKind.WHITESPACE: str,
}

_TRIVIA = frozenset({TokenKind.COMMENT, TokenKind.WHITESPACE, TokenKind.NEW_LINE})

Payload = Union[Keyword, Bracket, SpecialSymbol, Number, str, None]


@dataclass(frozen=True)
class Token:
    """A single token: its kind and the value it carries."""

    kind: TokenKind
    value: Payload = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES.get(self.kind)
        if expected is None:
            if self.value is not None:
                raise TypeError(f"{self.kind.name} token carries no value")
        elif not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.name} token needs a {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def keyword(cls, keyword: Keyword) -> Token:
        return cls(TokenKind.KEYWORD, keyword)

    @classmethod
    def bracket(cls, bracket: Bracket) -> Token:
        return cls(TokenKind.BRACKET, bracket)

    @classmethod
    def symbol(cls, symbol: SpecialSymbol) -> Token:
        return cls(TokenKind.SPECIAL_SYMBOL, symbol)

    @classmethod
    def number(cls, number: Number) -> Token:
        return cls(TokenKind.NUMBER, number)

    @classmethod
    def identifier(cls, name: str) -> Token:
        return cls(TokenKind.IDENTIFIER, name)

    @classmethod
    def comment(cls, text: str) -> Token:
        return cls(TokenKind.COMMENT, text)

    @classmethod
    def whitespace(cls, text: str) -> Token:
        return cls(TokenKind.WHITESPACE, text)

    @classmethod
    def newline(cls) -> Token:
        return cls(TokenKind.NEW_LINE)

    def is_trivia(self) -> bool:
        """Return True for tokens the parser skips: comments, whitespace, newlines."""
        return self.kind in _TRIVIA

    @property
    def name(self) -> Optional[str]:
        """The identifier's name, or None for any other token."""
        return self.value if self.kind is TokenKind.IDENTIFIER else None

    def __str__(self) -> str:
        if self.kind is TokenKind.NEW_LINE:
            return "\n"
        return str(self.value)

    def __repr__(self) -> str:
        kind = _variant_name(self.kind.name)
        if self.value is None:
            return kind
        if isinstance(self.value, Enum):
            payload = _variant_name(self.value.name)
        elif isinstance(self.value, Number):
            payload = repr(self.value)
        else:
            payload = json.dumps(self.value)
        return f"{kind}({payload})"