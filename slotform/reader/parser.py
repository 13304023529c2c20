"""
  Lisp Reader: lexer and streaming parser.

Emits Python primitives instead of Cons cells:

    - nil -> Nil
    - lists -> Python list
    - dotted lists -> (list_part, tail)
    - symbols -> Symbol
    - strings, characters -> str
    - numbers -> int/float, #C(re im) -> complex
    - vectors #(...) -> Vector
    - mappings {k v ...} -> dict
    - quote forms -> [quote, expr], etc.
    - function shorthand #'x -> [function, x]
"""

from __future__ import annotations

import ast
import re
from typing import Iterator, Optional

from slotform import SExpression
from slotform.types.errors import SlotformSyntaxError
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol
from slotform.types.vector import Vector

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
    ",@": Symbol("unquote-splicing"),
}

TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<ml_start>#\|)"  # multi-line comment start
    r"|(?P<quote>[\'`])"  # ' and `
    r"|(?P<unquote>,@|,)"  # , and ,@
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*?")'  # double-quoted strings
    r"|(?P<char>#\\(?:newline|space|tab|return|.))"  # character literals
    r"|(?P<vector>#\()"  # vector reader macro
    r"|(?P<func_shorthand>#\')"  # function shorthand #'
    r"|(?P<complex>#C)"  # complex number
    r"|(?P<radix>#b[01]+|#o[0-7]+|#x[0-9A-Fa-f]+)"  # binary, octal, hex
    r'|(?P<symbol>[^\s(){}\'",;]+)'  # fallback: symbols
    r")",
    re.DOTALL,
)

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
    "return": "\r",
}

RADIX = {"#b": 2, "#o": 8, "#x": 16}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)

    def skip_whitespace_and_comments():
        nonlocal pos
        while pos < n:
            match = TOKEN_RE.match(source, pos)
            if not match:
                if source[pos].isspace():
                    pos += 1
                    continue
                raise SlotformSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
            if match.group("comment"):
                pos = match.end()
            elif match.group("ml_start"):
                pos = match.end()
                depth = 1
                while depth > 0:
                    if pos >= n:
                        raise SlotformSyntaxError("Unterminated multi-line comment")
                    if source.startswith("#|", pos):
                        depth += 1
                        pos += 2
                    elif source.startswith("|#", pos):
                        depth -= 1
                        pos += 2
                    else:
                        pos += 1
            else:
                break

    while pos < n:
        skip_whitespace_and_comments()
        if pos >= n:
            break

        m = TOKEN_RE.match(source, pos)
        if not m:
            raise SlotformSyntaxError(f"Unknown token at {pos}")
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                yield nm, m.group(nm)
                pos = m.end()
                break


INT_RE = re.compile(r"[+-]?[0-9]+")
FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _atom(tok_val: str) -> SExpression:
    # Only plain decimal notation is numeric; inf, nan and 1_000 are symbols.
    if tok_val.lower() == "nil":
        return Nil
    if INT_RE.fullmatch(tok_val):
        return int(tok_val)
    if FLOAT_RE.fullmatch(tok_val):
        return float(tok_val)
    return Symbol(tok_val)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def _parse_until(self, closing: str, what: str) -> list[SExpression]:
        items = []
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise SlotformSyntaxError(f"Unexpected EOF while reading {what}")
            if tok_type == closing:
                self.advance()
                return items
            items.append(self.parse_expr())

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return _atom(tok_val)

        if tok_type in ("quote", "unquote"):
            self.advance()
            return [QUOTE_FORMS[tok_val], self.parse_expr()]

        if tok_type == "func_shorthand":
            self.advance()
            return [Symbol("function"), self.parse_expr()]

        # List or dotted list
        if tok_type == "lparen":
            self.advance()
            items = []
            while True:
                if self.peek()[0] == "rparen":
                    self.advance()
                    break
                if self.peek()[0] is None:
                    raise SlotformSyntaxError("Unmatched '('")
                if self.peek() == ("symbol", "."):
                    self.advance()
                    cdr_expr = self.parse_expr()
                    if self.peek()[0] != "rparen":
                        raise SlotformSyntaxError("Expected ')' after dotted cdr")
                    self.advance()
                    return items, cdr_expr  # tuple for a dotted list
                items.append(self.parse_expr())
            return items

        if tok_type == "rparen":
            raise SlotformSyntaxError("Unexpected ')'")

        if tok_type == "vector":
            self.advance()
            return Vector(self._parse_until("rparen", "vector"))

        if tok_type == "lbrace":
            self.advance()
            items = self._parse_until("rbrace", "mapping")
            if len(items) % 2:
                raise SlotformSyntaxError("Mapping literal needs an even number of forms")
            return dict(zip(items[::2], items[1::2]))

        if tok_type == "char":
            self.advance()
            val = tok_val[2:]  # strip off "#\"
            if len(val) == 1:
                return val
            return NAMED_CHARS.get(val.lower(), val)

        if tok_type == "string":
            self.advance()
            return ast.literal_eval(tok_val)

        if tok_type == "radix":
            self.advance()
            return int(tok_val[2:], RADIX[tok_val[:2]])

        if tok_type == "complex":
            self.advance()
            if self.peek()[0] != "lparen":
                raise SlotformSyntaxError("Expected '(' after #C")
            self.advance()
            real_part = self.parse_expr()
            imag_part = self.parse_expr()
            if self.peek()[0] != "rparen":
                raise SlotformSyntaxError("Expected ')' after #C arguments")
            self.advance()
            return complex(real_part, imag_part)

        raise SlotformSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> SExpression:
    """Read the first form of `source`."""
    return TokenStream(lex(source)).parse_expr()


def read_all(source: str) -> list[SExpression]:
    return list(TokenStream(lex(source)).parse_all())
