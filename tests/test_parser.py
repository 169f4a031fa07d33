import re

import pytest

from plasmc.diagnostics import UnexpectedEOF, UnexpectedToken
from plasmc.parser import Parser, parse
from plasmc.span import Span
from plasmc.syntax import Return, VariableDeclaration
from plasmc.tokens import Bracket, Keyword, Number, SpecialSymbol, Token

_SYMBOLS = sorted(SpecialSymbol, key=lambda s: -len(s.value))
_PATTERN = re.compile(
    r"(?P<nl>\n)|(?P<ws>[ \t]+)|(?P<comment>//[^\n]*)|(?P<num>\d+(?:\.\d+)?)"
    r"|(?P<ident>[A-Za-z_]\w*)|(?P<br>[(){}])|(?P<sym>"
    + "|".join(re.escape(s.value) for s in _SYMBOLS)
    + ")"
)
_KEYWORDS = {k.value: k for k in Keyword}
_SYMBOL_BY_TEXT = {s.value: s for s in SpecialSymbol}


def _make_lexeme(kind, text):
    if kind == "nl":
        return Token.newline()
    if kind == "ws":
        return Token.whitespace(text)
    if kind == "comment":
        return Token.comment(text)
    if kind == "num":
        return Token.number(Number(text, "." in text))
    if kind == "ident":
        if text in _KEYWORDS:
            return Token.keyword(_KEYWORDS[text])
        return Token.identifier(text)
    if kind == "br":
        return Token.bracket(Bracket(text))
    return Token.symbol(_SYMBOL_BY_TEXT[text])


def lex(code):
    pairs = []
    pos = 0
    while pos < len(code):
        match = _PATTERN.match(code, pos)
        assert match is not None, f"cannot lex at {pos}"
        lexeme = _make_lexeme(match.lastgroup, match.group())
        pairs.append((lexeme, Span(match.start(), match.end())))
        pos = match.end()
    return pairs


def render_program(code):
    ast, errors = Parser(lex(code)).parse()
    assert errors == []
    return str(ast)


def in_main(statement):
    return f"fn main() {{\n    {statement}\n}}\n"


_CANONICAL_FUNCTIONS = [
    "fn empty() {}",
    "fn no_args() {\n    return\n}",
    "fn one_arg(x: i32) {\n    return\n}",
    "fn two_args(x: i32, y: f64) {\n    return\n}",
    "fn voidf() -> void {\n    return\n}",
    "fn intf() -> i32 {\n    return 5\n}",
    "fn floatf() -> f64 {\n    return 5.0\n}",
    "fn boolf() -> bool {\n    return true\n}",
]


@pytest.mark.parametrize("code", _CANONICAL_FUNCTIONS)
def test_function_signature_round_trip(code):
    assert render_program(code + "\n") == code + "\n"


def test_functions_separated_by_blank_lines():
    program = "\n\n".join(_CANONICAL_FUNCTIONS) + "\n"
    assert render_program(program) == program


def test_multi_line_arguments_collapse():
    code = "fn multi_line(\n    x: i32,\n    y: f64,\n    z: bool,\n) -> void {\n    return\n}\n"
    expected = "fn multi_line(x: i32, y: f64, z: bool) -> void {\n    return\n}\n"
    assert render_program(code) == expected


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("1 + 2 + 3 - 4", "(((1 + 2) + 3) - 4)"),
        ("1 * 2 * 3", "((1 * 2) * 3)"),
        ("1 + 2 * 3", "(1 + (2 * 3))"),
        ("(1 + 2) * 3", "((1 + 2) * 3)"),
        ("1 * 2 / 3 % 4 \\ 5", "((((1 * 2) / 3) % 4) \\ 5)"),
        ("(1+2)-(3-4)", "((1 + 2) - (3 - 4))"),
    ],
)
def test_arithmetic_binary_expressions(expr, expected):
    assert render_program(in_main(f"let v = {expr}")) == in_main(f"let v = {expected}")


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("true && false || true", "((true && false) || true)"),
        (
            "1 == 2 && 3 != 4 || 5 < 6 && 7 <= 8 || 9 > 10 && 11 >= 12",
            "((((1 == 2) && (3 != 4)) || ((5 < 6) && (7 <= 8))) "
            "|| ((9 > 10) && (11 >= 12)))",
        ),
    ],
)
def test_logical_binary_expressions(expr, expected):
    assert render_program(in_main(f"let v = {expr}")) == in_main(f"let v = {expected}")


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("!true", "!true"),
        ("~1", "~1"),
        ("!!false", "!!false"),
        ("~~2", "~~2"),
        ("!~!~3", "!~!~3"),
        ("~!~!4", "~!~!4"),
        ("-5", "-5"),
        ("--6", "--6"),
        ("- -7", "--7"),
        ("-(-8)", "--8"),
        ("!-!9", "!-!9"),
        ("!{return !true}", "!{\n        return !true\n    }"),
    ],
)
def test_unary_expressions(expr, expected):
    assert render_program(in_main(f"let v = {expr}")) == in_main(f"let v = {expected}")


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("{}", "{}"),
        ("{return (1)}", "{\n        return 1\n    }"),
        (
            "{ let a = { return get_value() + 1 * 2 } return a }",
            "{\n        let a = {\n            return (get_value() + (1 * 2))\n"
            "        }\n        return a\n    }",
        ),
    ],
)
def test_block_expressions(expr, expected):
    assert render_program(in_main(f"let v = {expr}")) == in_main(f"let v = {expected}")


def test_call_statement_with_block_argument():
    code = in_main("print({ let value = compute_value(x, 1, 3) return value + x })")
    expected = in_main(
        "print({\n        let value = compute_value(x, 1, 3)\n"
        "        return (value + x)\n    })"
    )
    assert render_program(code) == expected


def test_comments_and_typed_declaration():
    code = "fn main() { // entry\n    let x: i32 = 2 ** 3 ** 2\n}\n"
    ast, errors = parse(lex(code))
    assert errors == []
    assert str(ast) == "fn main() {\n    let x: i32 = (2 ** (3 ** 2))\n}\n"


def test_statement_spans():
    code = "fn main() {\n    let a = 1 + 2\n    return a\n}"
    ast, errors = parse(lex(code))
    assert errors == []
    func = ast.items[0]
    decl, ret = func.body
    assert isinstance(decl.node, VariableDeclaration)
    assert decl.span == Span(code.index("let"), code.index("2") + 1)
    assert isinstance(ret.node, Return)
    assert ret.span == Span(code.index("return"), code.index("return a") + len("return a"))
    assert func.name.span == Span(code.index("main"), code.index("main") + 4)


def test_top_level_garbage_reports_each_token():
    ast, errors = parse(lex("let x = 1"))
    assert ast.items == []
    assert len(errors) == 4
    assert all(isinstance(e.node, UnexpectedToken) for e in errors)
    assert all(e.node.expected == "function definition" for e in errors)


def test_eof_in_arguments():
    ast, errors = parse(lex("fn f("))
    assert ast.items == []
    assert [e.node for e in errors] == [UnexpectedEOF("function argument or `)`")]


def test_eof_after_signature():
    _, errors = parse(lex("fn f()"))
    assert [e.node for e in errors] == [UnexpectedEOF("`-> T {` or `{`")]


def test_eof_after_fn_keyword():
    _, errors = parse(lex("fn"))
    assert [e.node for e in errors] == [UnexpectedEOF("identifier")]


def test_eof_in_expect_uses_token_repr():
    _, errors = parse(lex("fn f"))
    assert [e.node for e in errors] == [UnexpectedEOF("`Bracket(RoundOpen)`")]


def test_unexpected_token_in_expect():
    code = "fn f) {}"
    _, errors = parse(lex(code))
    first = errors[0]
    assert first.node == UnexpectedToken(Token.bracket(Bracket.ROUND_CLOSE), "`(`")
    assert first.span == Span(code.index(")"), code.index(")") + 1)


def test_recovers_after_bad_statement():
    ast, errors = parse(lex("fn f() {\n    +\n    let a = 1\n}\n"))
    assert len(errors) == 1
    assert errors[0].node.token == Token.symbol(SpecialSymbol.PLUS)
    assert len(ast.items[0].body) == 1
    assert str(ast) == "fn f() {\n    let a = 1\n}\n"


def test_assignment_is_reported():
    _, errors = parse(lex("fn f() {\n    x = 1\n}\n"))
    assert isinstance(errors[0].node, UnexpectedToken)
    assert errors[0].node.token == Token.symbol(SpecialSymbol.EQUALS)


def test_missing_colon_or_equals():
    _, errors = parse(lex("fn f() {\n    let a 1\n}\n"))
    assert errors[0].node.expected == "`:` or `=`"


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        parse(lex("fn f(x: foo) {}"))


def test_error_message_text():
    _, errors = parse(lex("fn f) {}"))
    assert str(errors[0].node).startswith("Unexpected token `)`")