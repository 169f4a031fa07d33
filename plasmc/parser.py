"""Recursive-descent parser building the syntax tree from tokens.

Binary expressions are parsed by precedence climbing on binding powers.
Errors are collected rather than raised, so one pass reports as many
problems as it can.
"""

from __future__ import annotations

from typing import Any, Iterable, List, NoReturn, Optional, Tuple

from .diagnostics import ParseError, UnexpectedEOF, UnexpectedToken
from .span import Span, Spanned
from .syntax import (
    AST,
    Argument,
    BinaryExpr,
    BinaryOp,
    Block,
    CallArgument,
    ExprStatement,
    Function,
    FunctionCall,
    Literal,
    Return,
    Type,
    UnaryExpr,
    UnaryOp,
    Variable,
    VariableDeclaration,
)
from .tokens import Bracket, Keyword, SpecialSymbol, Token, TokenKind

_FN = Token.keyword(Keyword.FN)
_LET = Token.keyword(Keyword.LET)
_RETURN = Token.keyword(Keyword.RETURN)
_ROUND_OPEN = Token.bracket(Bracket.ROUND_OPEN)
_ROUND_CLOSE = Token.bracket(Bracket.ROUND_CLOSE)
_CURLY_OPEN = Token.bracket(Bracket.CURLY_OPEN)
_CURLY_CLOSE = Token.bracket(Bracket.CURLY_CLOSE)
_COLON = Token.symbol(SpecialSymbol.COLON)
_COMMA = Token.symbol(SpecialSymbol.COMMA)
_EQUALS = Token.symbol(SpecialSymbol.EQUALS)
_MINUS = Token.symbol(SpecialSymbol.MINUS)
_GREATER_THAN = Token.symbol(SpecialSymbol.GREATER_THAN)

_STATEMENT = "statement (function call, new variable, return, etc.)"
_SIGNATURE_END = "`-> T {` or `{`"
_FUNCTION_ARGUMENT = "function argument or `)`"

_BINARY_OPS = {
    SpecialSymbol.PLUS: BinaryOp.ADD,
    SpecialSymbol.MINUS: BinaryOp.SUB,
    SpecialSymbol.ASTERISK: BinaryOp.MUL,
    SpecialSymbol.SLASH: BinaryOp.DIV,
    SpecialSymbol.PERCENT: BinaryOp.MOD,
    SpecialSymbol.BACKSLASH: BinaryOp.DIV_INT,
    SpecialSymbol.DOUBLE_ASTERISK: BinaryOp.POW,
    SpecialSymbol.AMPERSAND: BinaryOp.BIT_AND,
    SpecialSymbol.PIPE: BinaryOp.BIT_OR,
    SpecialSymbol.CARET: BinaryOp.BIT_XOR,
    SpecialSymbol.DOUBLE_LESS_THAN: BinaryOp.SHL,
    SpecialSymbol.DOUBLE_GREATER_THAN: BinaryOp.SHR,
    SpecialSymbol.DOUBLE_AMPERSAND: BinaryOp.AND,
    SpecialSymbol.DOUBLE_PIPE: BinaryOp.OR,
    SpecialSymbol.DOUBLE_EQUALS: BinaryOp.EQ,
    SpecialSymbol.EXCLAMATION_EQUALS: BinaryOp.NEQ,
    SpecialSymbol.LESS_THAN: BinaryOp.LT,
    SpecialSymbol.GREATER_THAN: BinaryOp.GT,
    SpecialSymbol.GREATER_THAN_EQUALS: BinaryOp.GEQ,
    SpecialSymbol.LESS_THAN_EQUALS: BinaryOp.LEQ,
}

_UNARY_OPS = {
    Token.symbol(SpecialSymbol.MINUS): UnaryOp.NEGATE,
    Token.symbol(SpecialSymbol.EXCLAMATION): UnaryOp.NOT,
    Token.symbol(SpecialSymbol.TILDE): UnaryOp.BIT_NOT,
}

_WORD_LITERALS = {
    "true": Literal.boolean(True),
    "false": Literal.boolean(False),
    "void": Literal.void(),
}

_EXPRESSION_STARTS = frozenset({_ROUND_OPEN, _CURLY_OPEN, *_UNARY_OPS})


class _Abort(Exception):
    """Unwinds a failed production once its error has been recorded."""


class Parser:
    """Parses a stream of ``(Token, Span)`` pairs into an AST.

    Comments, whitespace and newlines in the stream are skipped.
    """

    def __init__(self, tokens: Iterable[Tuple[Token, Span]]) -> None:
        self._tokens = ((token, span) for token, span in tokens if not token.is_trivia())
        self._lookahead: List[Tuple[Token, Span]] = []
        self._errors: List[Spanned[ParseError]] = []
        self._last_span = Span.zero()

    def parse(self) -> Tuple[AST, List[Spanned[ParseError]]]:
        """Parse the whole stream; return the tree and every error found.

        An unknown type name raises ValueError.
        """
        ast = AST()
        while (token := self._peek_token()) is not None:
            if token == _FN:
                try:
                    ast.add_function(self._parse_function())
                except _Abort:
                    pass
            else:
                bad, span = self._take()  # type: ignore[misc]
                self._error(UnexpectedToken(bad, "function definition"), span)
        return ast, list(self._errors)

    # Token stream

    def _peek(self) -> Optional[Tuple[Token, Span]]:
        if not self._lookahead:
            pair = next(self._tokens, None)
            if pair is None:
                return None
            self._lookahead.append(pair)
        return self._lookahead[0]

    def _peek_token(self) -> Optional[Token]:
        pair = self._peek()
        return None if pair is None else pair[0]

    def _take(self) -> Optional[Tuple[Token, Span]]:
        pair = self._lookahead.pop() if self._lookahead else next(self._tokens, None)
        if pair is not None:
            self._last_span = pair[1]
        return pair

    # Error reporting

    def _error(self, error: ParseError, span: Span) -> None:
        self._errors.append(Spanned(error, span))

    def _fail(self, error: ParseError, span: Span) -> NoReturn:
        self._error(error, span)
        raise _Abort

    def _eof(self, expected: str) -> NoReturn:
        self._fail(UnexpectedEOF(expected), self._last_span)

    def _unexpected(self, expected: str) -> NoReturn:
        """Consume the next token and report it as unexpected."""
        pair = self._take()
        if pair is None:
            self._eof(expected)
        token, span = pair
        self._fail(UnexpectedToken(token, expected), span)

    def _expect(self, expected: Token) -> Span:
        pair = self._take()
        if pair is None:
            self._eof(f"`{expected!r}`")
        token, span = pair
        if token != expected:
            self._fail(UnexpectedToken(token, f"`{expected}`"), span)
        return span

    def _expect_kind(self, kind: TokenKind, expected: str) -> Tuple[Any, Span]:
        pair = self._take()
        if pair is None:
            self._eof(expected)
        token, span = pair
        if token.kind is not kind:
            self._fail(UnexpectedToken(token, expected), span)
        return token.value, span

    def _expect_ident(self) -> Tuple[str, Span]:
        return self._expect_kind(TokenKind.IDENTIFIER, "identifier")

    def _parse_type(self) -> Spanned[Type]:
        name, span = self._expect_ident()
        return Spanned(Type.from_str(name), span)

    # Items

    def _parse_function(self) -> Function:
        self._expect(_FN)
        name, name_span = self._expect_ident()
        self._expect(_ROUND_OPEN)

        args: List[Spanned[Argument]] = []
        while True:
            token = self._peek_token()
            if token is None:
                self._eof(_FUNCTION_ARGUMENT)
            if token.kind is TokenKind.IDENTIFIER:
                arg_name, arg_span = self._expect_ident()
                self._expect(_COLON)
                ty = self._parse_type()
                argument = Argument(Spanned(arg_name, arg_span), ty)
                args.append(Spanned(argument, arg_span.join(ty.span)))
            elif token == _ROUND_CLOSE:
                self._take()
                break
            elif token == _COMMA:
                self._take()
            else:
                self._unexpected(_FUNCTION_ARGUMENT)

        token = self._peek_token()
        if token is None:
            self._eof(_SIGNATURE_END)
        return_type = None
        if token == _MINUS:
            self._take()
            self._expect(_GREATER_THAN)
            return_type = self._parse_type()
        elif token != _CURLY_OPEN:
            self._unexpected(_SIGNATURE_END)

        body = self._parse_block().node
        return Function(Spanned(name, name_span), args, return_type, body)

    def _parse_block(self) -> Spanned[list]:
        start = self._expect(_CURLY_OPEN)
        statements: list = []
        while True:
            token = self._peek_token()
            if token is None:
                self._error(UnexpectedEOF("statement or `}`"), self._last_span)
                return Spanned(statements, start.join(self._last_span))
            if token == _CURLY_CLOSE:
                _, end = self._take()  # type: ignore[misc]
                return Spanned(statements, start.join(end))
            try:
                statements.append(self._parse_statement())
            except _Abort:
                continue

    # Statements

    def _parse_statement(self) -> Spanned[Any]:
        token = self._peek_token()
        if token is None:
            self._eof(_STATEMENT)

        if token == _LET:
            return self._parse_variable_declaration()

        if token.kind is TokenKind.IDENTIFIER:
            _, span = self._take()  # type: ignore[misc]
            following = self._peek_token()
            if following is None:
                self._take()
                self._eof("`(` or `=`")
            if following == _ROUND_OPEN:
                return self._parse_function_call(token.value, span).map(ExprStatement)
            if following == _EQUALS:
                self._unexpected("`(` (assignment is not supported)")
            self._unexpected("`(` or `=`")

        if token == _RETURN:
            _, return_span = self._take()  # type: ignore[misc]
            following = self._peek_token()
            if following is None:
                self._take()
                self._eof("expression or new line with `}`")
            if self._starts_expression(following):
                expr = self._parse_expression(0)
                return Spanned(Return(expr), return_span.join(expr.span))
            return Spanned(Return(), return_span)

        self._unexpected(_STATEMENT)

    @staticmethod
    def _starts_expression(token: Token) -> bool:
        return (
            token.kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER)
            or token in _EXPRESSION_STARTS
        )

    def _parse_function_call(self, name: str, span: Span) -> Spanned[FunctionCall]:
        self._expect(_ROUND_OPEN)
        arguments: List[CallArgument] = []
        while True:
            pair = self._peek()
            if pair is None:
                self._eof("function argument or ')'")
            token, next_span = pair
            if token == _ROUND_CLOSE:
                self._take()
                call = FunctionCall(Spanned(name, span), arguments)
                return Spanned(call, span.join(next_span))
            if token == _COMMA:
                self._take()
                continue
            try:
                arguments.append(CallArgument(self._parse_expression(0)))
            except _Abort:
                continue

    def _parse_variable_declaration(self) -> Spanned[VariableDeclaration]:
        first = self._expect(_LET)
        name, name_span = self._expect_ident()

        pair = self._take()
        if pair is None:
            self._eof("`:` or `=`")
        token, span = pair
        ty = None
        if token == _COLON:
            ty = self._parse_type()
            self._expect(_EQUALS)
        elif token != _EQUALS:
            self._fail(UnexpectedToken(token, "`:` or `=`"), span)

        value = self._parse_expression(0)
        declaration = VariableDeclaration(Spanned(name, name_span), value, ty)
        return Spanned(declaration, first.join(value.span))

    # Expressions

    def _parse_expression(self, min_bp: int) -> Spanned[Any]:
        left = self._parse_atom()
        while True:
            token = self._peek_token()
            if token is None:
                self._eof("expression")
            op = _BINARY_OPS.get(token.value) if token.kind is TokenKind.SPECIAL_SYMBOL else None
            if op is None:
                break
            left_bp, right_bp = op.binding_power()
            if left_bp < min_bp:
                break
            self._take()
            right = self._parse_expression(right_bp)
            left = Spanned(BinaryExpr(op, left, right), left.span.join(right.span))
        return left

    def _parse_atom(self) -> Spanned[Any]:
        """Parse a literal, variable, call, parenthesised or block expression, or unary."""
        token = self._peek_token()
        if token is None:
            self._eof("expression")

        if token.kind is TokenKind.IDENTIFIER:
            _, span = self._take()  # type: ignore[misc]
            name = token.value
            literal = _WORD_LITERALS.get(name)
            if literal is not None:
                return Spanned(literal, span)
            following = self._peek_token()
            if following is None:
                self._eof("'('")
            if following == _ROUND_OPEN:
                return self._parse_function_call(name, span)
            return Spanned(Variable(name), span)

        if token.kind is TokenKind.NUMBER:
            number, span = self._expect_kind(TokenKind.NUMBER, "number")
            return Spanned(Literal.from_number(number), span)

        if token == _ROUND_OPEN:
            self._take()
            expr = self._parse_expression(0)
            self._expect(_ROUND_CLOSE)
            return expr

        if token == _CURLY_OPEN:
            return self._parse_block().map(Block)

        op = _UNARY_OPS.get(token)
        if op is not None:
            self._take()
            inner = self._parse_atom()
            return Spanned(UnaryExpr(op, inner), inner.span)

        self._unexpected("expression")


def parse(tokens: Iterable[Tuple[Token, Span]]) -> Tuple[AST, List[Spanned[ParseError]]]:
    """Parse ``(Token, Span)`` pairs into an AST and the list of errors found."""
    return Parser(tokens).parse()