import pytest

from slotform.types.errors import SlotformSyntaxError
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol
from slotform.types.vector import Vector
from slotform.reader.parser import lex, TokenStream, read, read_all


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("'a", [("quote", "'"), ("symbol", "a")]),
        ("(a b c)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("symbol", "c"), ("rparen", ")")]),
        ('"hello"', [("string", '"hello"')]),
        ("#b1010 #o12 #xA", [("radix", "#b1010"), ("radix", "#o12"), ("radix", "#xA")]),
        ("#C(1 2)", [("complex", "#C"), ("lparen", "("), ("symbol", "1"), ("symbol", "2"), ("rparen", ")")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("#| block #| nested |# |# a", [("symbol", "a")]),
        ("`y", [("quote", "`"), ("symbol", "y")]),
        (",z", [("unquote", ","), ("symbol", "z")]),
        (",@w", [("unquote", ",@"), ("symbol", "w")]),
        ("#'f", [("func_shorthand", "#'"), ("symbol", "f")]),
        ("#(1)", [("vector", "#("), ("symbol", "1"), ("rparen", ")")]),
        ("{a 1}", [("lbrace", "{"), ("symbol", "a"), ("symbol", "1"), ("rbrace", "}")]),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", Nil),
        ("NIL", Nil),
        ("123", 123),
        ("-45", -45),
        ("3.14", 3.14),
        ("'a", [Symbol("quote"), Symbol("a")]),
        ("(a b c)", [Symbol("a"), Symbol("b"), Symbol("c")]),
        ("()", []),
        ("(a . b)", ([Symbol("a")], Symbol("b"))),
        ("#C(1 2)", complex(1, 2)),
        ('"hello"', "hello"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("#\\a", "a"),
        ("#\\space", " "),
        ("#'my-func", [Symbol("function"), Symbol("my-func")]),
        ("#b1010", 10),
        ("#o12", 10),
        ("#xA", 10),
        (":type", Symbol(":type")),
        ("#t", Symbol("#t")),
    ],
)
def test_parser(source, expected):
    assert read(source) == expected


def test_vector_literal_reads_as_vector():
    result = read("#(1 2 3)")
    assert isinstance(result, Vector)
    assert result == [1, 2, 3]


def test_mapping_literal_reads_as_dict():
    assert read("{a 1 b 2}") == {Symbol("a"): 1, Symbol("b"): 2}


def test_mapping_literal_needs_pairs():
    with pytest.raises(SlotformSyntaxError):
        read("{a 1 b}")


def test_nested_lists():
    assert read("((a b) (c d))") == [[Symbol("a"), Symbol("b")], [Symbol("c"), Symbol("d")]]


def test_parse_all_reads_every_form():
    assert read_all("1 (x) 'y") == [1, [Symbol("x")], [Symbol("quote"), Symbol("y")]]


def test_slot_declaration_shape():
    decl = read('(label "" :type string)')
    assert decl == [Symbol("label"), "", Symbol(":type"), Symbol("string")]


def test_unmatched_paren_is_syntax_error():
    with pytest.raises(SlotformSyntaxError):
        read("(a b")


def test_token_stream_peek_does_not_consume():
    stream = TokenStream(lex("a b"))
    assert stream.peek() == ("symbol", "a")
    assert stream.parse_expr() == Symbol("a")
    assert stream.parse_expr() == Symbol("b")
    assert stream.parse_expr() is None


@pytest.mark.parametrize(
    "source, expected",
    [
        ("+7", 7),
        ("1.", 1.0),
        (".5", 0.5),
        ("-2.5e3", -2500.0),
        ("1e3", 1000.0),
    ],
)
def test_decimal_numbers(source, expected):
    result = read(source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("source", ["inf", "-inf", "nan", "NaN", "infinity", "1_000", "+", "-", "1+", "e5"])
def test_numeric_looking_tokens_read_as_symbols(source):
    assert read(source) == Symbol(source)
