"""Abstract syntax tree of the Plasm language and its source-like rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .span import Spanned
from .tokens import Number

_INDENT = "    "


def _pad(depth: int) -> str:
    return _INDENT * depth


class BinaryOp(Enum):
    """Infix operators, valued by their source spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    DIV_INT = "\\"
    POW = "**"

    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "^"
    SHL = "<<"
    SHR = ">>"

    AND = "&&"
    OR = "||"
    EQ = "=="
    NEQ = "!="
    LT = "<"
    GT = ">"
    GEQ = ">="
    LEQ = "<="

    def binding_power(self) -> Tuple[int, int]:
        """Return the (left, right) binding power used by the expression parser.

        Left-associative operators bind tighter on the right; ``**`` is
        right-associative.
        """
        return _BINDING_POWER[self]

    def __str__(self) -> str:
        return self.value


_BINDING_POWER = {
    BinaryOp.OR: (1, 2),
    BinaryOp.AND: (3, 4),
    BinaryOp.EQ: (5, 6),
    BinaryOp.NEQ: (5, 6),
    BinaryOp.LT: (5, 6),
    BinaryOp.GT: (5, 6),
    BinaryOp.LEQ: (5, 6),
    BinaryOp.GEQ: (5, 6),
    BinaryOp.BIT_OR: (7, 8),
    BinaryOp.BIT_XOR: (9, 10),
    BinaryOp.BIT_AND: (11, 12),
    BinaryOp.SHL: (13, 14),
    BinaryOp.SHR: (13, 14),
    BinaryOp.ADD: (15, 16),
    BinaryOp.SUB: (15, 16),
    BinaryOp.MUL: (17, 18),
    BinaryOp.DIV: (17, 18),
    BinaryOp.MOD: (17, 18),
    BinaryOp.DIV_INT: (17, 18),
    BinaryOp.POW: (20, 19),
}


class PrimitiveType(Enum):
    """Built-in types, valued by their name in source."""

    VOID = "void"
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Type:
    """A type written in source."""

    primitive: PrimitiveType

    @classmethod
    def from_str(cls, identifier: str) -> Type:
        """Resolve a type name; raise ValueError if it names no known type."""
        try:
            return cls(PrimitiveType(identifier))
        except ValueError:
            raise ValueError(f"unknown type `{identifier}`") from None

    def __str__(self) -> str:
        return str(self.primitive)


class UnaryOp(Enum):
    """Prefix operators."""

    NEGATE = "-"
    NOT = "!"
    BIT_NOT = "~"

    def __str__(self) -> str:
        return self.value


class LiteralKind(Enum):
    """The kind of a literal value."""

    VOID = "void"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class Literal:
    """A literal value; numbers keep their source text."""

    kind: LiteralKind
    value: Union[bool, str, None] = None

    @classmethod
    def void(cls) -> Literal:
        return cls(LiteralKind.VOID)

    @classmethod
    def boolean(cls, value: bool) -> Literal:
        return cls(LiteralKind.BOOL, value)

    @classmethod
    def integer(cls, text: str) -> Literal:
        return cls(LiteralKind.INTEGER, text)

    @classmethod
    def float(cls, text: str) -> Literal:
        return cls(LiteralKind.FLOAT, text)

    @classmethod
    def from_number(cls, number: Number) -> Literal:
        """Build an integer or float literal from a number token."""
        kind = LiteralKind.FLOAT if number.is_float else LiteralKind.INTEGER
        return cls(kind, number.text)

    def render(self, indent: int = 0) -> str:
        return str(self)

    def __str__(self) -> str:
        if self.kind is LiteralKind.VOID:
            return "void"
        if self.kind is LiteralKind.BOOL:
            return "true" if self.value else "false"
        return str(self.value)


@dataclass(frozen=True)
class Variable:
    """A reference to a named variable."""

    name: str

    def render(self, indent: int = 0) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


@dataclass
class CallArgument:
    """An argument in a call, optionally named."""

    value: Spanned["Expr"]
    name: Optional[Spanned[str]] = None

    def render(self, indent: int = 0) -> str:
        rendered = self.value.node.render(indent)
        if self.name is not None:
            return f"{self.name}={rendered}"
        return rendered


@dataclass
class FunctionCall:
    """A call of a function by name."""

    name: Spanned[str]
    args: List[CallArgument] = field(default_factory=list)

    def render(self, indent: int = 0) -> str:
        args = ", ".join(arg.render(indent) for arg in self.args)
        return f"{self.name}({args})"

    def __str__(self) -> str:
        return self.render()


@dataclass
class Block:
    """A braced sequence of statements used as an expression."""

    statements: List[Spanned["Statement"]] = field(default_factory=list)

    def render(self, indent: int = 0) -> str:
        if not self.statements:
            return "{}"
        body = "".join(s.node.render(indent + 1) for s in self.statements)
        return "{\n" + body + _pad(indent) + "}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class UnaryExpr:
    """A prefix operator applied to an expression."""

    op: UnaryOp
    expr: Spanned["Expr"]

    def render(self, indent: int = 0) -> str:
        return f"{self.op}{self.expr.node.render(indent)}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class BinaryExpr:
    """An infix operator applied to two expressions."""

    op: BinaryOp
    left: Spanned["Expr"]
    right: Spanned["Expr"]

    def render(self, indent: int = 0) -> str:
        left = self.left.node.render(indent)
        right = self.right.node.render(indent)
        return f"({left} {self.op} {right})"

    def __str__(self) -> str:
        return self.render()


Expr = Union[Literal, Variable, FunctionCall, Block, UnaryExpr, BinaryExpr]


@dataclass
class VariableDeclaration:
    """A ``let`` statement, with an optional type annotation."""

    name: Spanned[str]
    value: Spanned[Expr]
    ty: Optional[Spanned[Type]] = None

    def render(self, indent: int = 1) -> str:
        value = self.value.node.render(indent)
        annotation = f": {self.ty}" if self.ty is not None else ""
        return f"{_pad(indent)}let {self.name}{annotation} = {value}\n"


@dataclass
class ExprStatement:
    """An expression evaluated for its effect."""

    expr: Expr

    def render(self, indent: int = 1) -> str:
        return f"{_pad(indent)}{self.expr.render(indent)}\n"


@dataclass
class Return:
    """A ``return`` statement with an optional value."""

    value: Optional[Spanned[Expr]] = None

    def render(self, indent: int = 1) -> str:
        if self.value is None:
            return f"{_pad(indent)}return\n"
        return f"{_pad(indent)}return {self.value.node.render(indent)}\n"


Statement = Union[VariableDeclaration, ExprStatement, Return]


@dataclass
class Argument:
    """A function parameter with its type."""

    name: Spanned[str]
    ty: Spanned[Type]

    def __str__(self) -> str:
        return f"{self.name}: {self.ty}"


@dataclass
class Function:
    """A function definition."""

    name: Spanned[str]
    args: List[Spanned[Argument]] = field(default_factory=list)
    return_type: Optional[Spanned[Type]] = None
    body: List[Spanned[Statement]] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.args)
        head = f"fn {self.name}({args})"
        if self.return_type is not None:
            head += f" -> {self.return_type}"
        if not self.body:
            return head + " {}\n"
        body = "".join(stmt.node.render(1) for stmt in self.body)
        return head + " {\n" + body + "}\n"


@dataclass
class AST:
    """A parsed source file: its top-level items in order."""

    items: List[Function] = field(default_factory=list)

    def add_function(self, func: Function) -> None:
        """Append a function definition."""
        self.items.append(func)

    def __str__(self) -> str:
        return "\n".join(str(item) for item in self.items)