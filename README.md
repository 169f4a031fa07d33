# plasmc

The front end of a compiler for the Plasm programming language. It provides
source spans, a line table that maps byte offsets to line and column
numbers, parse errors with code snippets taken from the source file, and a
recursive-descent parser that turns a token stream into an abstract syntax
tree.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `plasmc.span`: `Span`, a `start`/`end` byte range with `zero`, `join`
  and `max`. `Spanned` pairs a node with its span, and `MaybeSpanned` holds
  a node whose span may be absent. Both compare and hash by their node only,
  and unpack as `node, span`.
- `plasmc.lines_table`: `LinesTable` records where each line starts and
  answers `line`, `column`, `line_index` and `offset` queries. Lines and
  columns count from 1.
- `plasmc.tokens`: the tokens the parser consumes. A `Token` has a
  `TokenKind` and a value. You build one with `Token.keyword`,
  `Token.bracket`, `Token.symbol`, `Token.number`, `Token.identifier`,
  `Token.comment`, `Token.whitespace` or `Token.newline`. The values come
  from the enums `Keyword`, `Bracket` and `SpecialSymbol`, or are a `Number`
  (its source text plus an `is_float` flag) or a string.
- `plasmc.syntax`: the syntax tree. It has `AST`, `Function`, `Argument`,
  `VariableDeclaration`, `ExprStatement`, `Return`, `Literal`, `Variable`,
  `FunctionCall`, `CallArgument`, `Block`, `UnaryExpr` and `BinaryExpr`. It
  also has the operator enums `BinaryOp` (with `binding_power`) and
  `UnaryOp`, and `PrimitiveType` and `Type`. `Type.from_str` raises
  `ValueError` for a name that is not a primitive type. `str()` on an `AST`
  gives the source back in normalised form, with every binary expression in
  parentheses and four-space indentation.
- `plasmc.diagnostics`: `ParseError` and its two kinds, `UnexpectedToken`
  and `UnexpectedEOF`. Each reports `error_type()` and `error_sub_type()`.
  `ErrorMessage` pulls the lines around an error out of the source file.
- `plasmc.parser`: `parse(tokens)` and the `Parser` class.

## Parsing

`parse` takes an iterable of `(Token, Span)` pairs and skips comment,
whitespace and newline tokens. It returns the tree together with a list of
`Spanned[ParseError]`. After an error the parser recovers and keeps going,
so one call can report several problems.

```python
from plasmc.parser import parse
from plasmc.span import Span
from plasmc.tokens import Bracket, Keyword, Number, SpecialSymbol, Token

# fn main() { return 1 + 2 * 3 }
tokens = [
    (Token.keyword(Keyword.FN), Span(0, 2)),
    (Token.identifier("main"), Span(3, 7)),
    (Token.bracket(Bracket.ROUND_OPEN), Span(7, 8)),
    (Token.bracket(Bracket.ROUND_CLOSE), Span(8, 9)),
    (Token.bracket(Bracket.CURLY_OPEN), Span(10, 11)),
    (Token.keyword(Keyword.RETURN), Span(12, 18)),
    (Token.number(Number("1")), Span(19, 20)),
    (Token.symbol(SpecialSymbol.PLUS), Span(21, 22)),
    (Token.number(Number("2")), Span(23, 24)),
    (Token.symbol(SpecialSymbol.ASTERISK), Span(25, 26)),
    (Token.number(Number("3")), Span(27, 28)),
    (Token.bracket(Bracket.CURLY_CLOSE), Span(29, 30)),
]

ast, errors = parse(tokens)
if errors:
    for error in errors:
        print(error.span, error.node)
else:
    print(ast)
```

This prints:

```
fn main() {
    return (1 + (2 * 3))
}
```

Binary operators are parsed by binding power, so `1 + 2 + 3 - 4` prints as
`(((1 + 2) + 3) - 4)`. `**` is right-associative. The unary operators `-`,
`!` and `~` bind to the atom that follows them, and `-(-8)` prints as
`--8`. The words `true`, `false` and `void` are read as literals. A
statement is a `let` declaration, a function call or a `return`.
Assignment to an existing variable is reported as an `UnexpectedToken`
error.

An error message reads like `Unexpected token `)`, expected expression` or
`Unexpected end of the file, expected statement or `}``.

## Line tables

```python
from plasmc.lines_table import LinesTable

table = LinesTable()
table.add_line(4)
table.add_line(7)
table.line(5)    # 2
table.column(5)  # 2
table.offset(3)  # 7
table.offset(9)  # None
```

## Code snippets for errors

`ErrorMessage(error, lines_table, file_path).extract_code_snippet(n)`
returns the source text from up to `n` lines before the error's line
through the end of that line, without its trailing newline. It also returns
the number of the first line returned. It raises `OSError` if the file
cannot be read, is shorter than the table says, or is not valid UTF-8.

## What this package does not do

It has no tokenizer: you must supply the `(Token, Span)` pairs that `parse`
reads. It has no command-line tool, no coloured error printer, no type
checking and no code generation. It turns tokens into a syntax tree and
reports parse errors, and that is all.