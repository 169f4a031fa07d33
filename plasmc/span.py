"""Source spans and values annotated with them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Span:
    """A half-open byte range ``[start, end)`` in a source file."""

    start: int
    end: int

    @classmethod
    def zero(cls) -> Span:
        """Return the empty span at offset zero."""
        return cls(0, 0)

    def join(self, other: Span) -> Span:
        """Return the smallest span covering both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def max(self, other: Span) -> Span:
        """Return the span that starts later; on a tie, the one ending later."""
        if self.start == other.start:
            return self if self.end >= other.end else other
        return self if self.start > other.start else other

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"


@dataclass(frozen=True, eq=False)
class Spanned(Generic[T]):
    """A value together with the span it came from.

    Equality and hashing consider only the value, never the span.
    """

    node: T
    span: Span = field(default_factory=Span.zero)

    @classmethod
    def zero(cls, node: T) -> Spanned[T]:
        """Wrap ``node`` with the zero span."""
        return cls(node, Span.zero())

    def map(self, func: Callable[[T], U]) -> Spanned[U]:
        """Apply ``func`` to the value, keeping the span."""
        return Spanned(func(self.node), self.span)

    def into_maybe(self) -> MaybeSpanned[T]:
        """Convert into a value whose span is known to be present."""
        return MaybeSpanned(self.node, self.span)

    def __iter__(self) -> Iterator[Any]:
        yield self.node
        yield self.span

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Spanned):
            return NotImplemented
        return self.node == other.node

    def __hash__(self) -> int:
        return hash(self.node)

    def __str__(self) -> str:
        return str(self.node)


@dataclass(frozen=True, eq=False)
class MaybeSpanned(Generic[T]):
    """A value that may or may not carry a span.

    Equality and hashing consider only the value, never the span.
    """

    node: T
    span: Optional[Span] = None

    def with_span(self, span: Span) -> MaybeSpanned[T]:
        """Return a copy carrying ``span``."""
        return MaybeSpanned(self.node, span)

    def into_spanned_or(self, default_span: Span) -> Spanned[T]:
        """Convert into a spanned value, using ``default_span`` if none is set."""
        return Spanned(self.node, self.span if self.span is not None else default_span)

    def map(self, func: Callable[[T], U]) -> MaybeSpanned[U]:
        """Apply ``func`` to the value, keeping the span."""
        return MaybeSpanned(func(self.node), self.span)

    def __iter__(self) -> Iterator[Any]:
        yield self.node
        yield self.span

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaybeSpanned):
            return NotImplemented
        return self.node == other.node

    def __hash__(self) -> int:
        return hash(self.node)

    def __str__(self) -> str:
        return str(self.node)