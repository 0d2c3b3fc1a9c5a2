import io

import pytest

from nosir.lexer import Lexer, Location, Token, TokenType, is_only_whitespace


def _lex(text):
    return Lexer(io.StringIO(text))


def _drain(lexer):
    tokens = []
    while True:
        token = lexer.next_token()
        if token.type is TokenType.EOF:
            return tokens
        tokens.append(token)


def test_symbols_are_recognised_with_columns():
    text = "{}()=;+-*/"
    tokens = _drain(_lex(text))
    assert [t.type for t in tokens] == [
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.EQUALS,
        TokenType.SEMICOLON,
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.MULT,
        TokenType.DIV,
    ]
    assert [t.value for t in tokens] == list(text)
    assert [t.loc.column for t in tokens] == list(range(1, len(text) + 1))


def test_keywords_and_identifiers():
    tokens = _drain(_lex("let def exit foo"))
    assert [t.type for t in tokens] == [
        TokenType.LET,
        TokenType.DEFINE,
        TokenType.EXIT,
        TokenType.IDENTIFIER,
    ]
    assert [t.value for t in tokens] == ["let", "def", "exit", "foo"]


def test_identifier_may_contain_digits():
    tokens = _drain(_lex("abc123 = 7;"))
    assert tokens[0] == Token(TokenType.IDENTIFIER, "abc123", Location(1, len("abc123")))


def test_number_column_is_last_digit():
    text = "  1234;"
    tokens = _drain(_lex(text))
    assert tokens[0].type is TokenType.NUMBER
    assert tokens[0].value == "1234"
    assert tokens[0].loc.column == text.index("4") + 1


def test_digits_then_letters_split_into_two_tokens():
    tokens = _drain(_lex("12ab"))
    assert [(t.type, t.value) for t in tokens] == [
        (TokenType.NUMBER, "12"),
        (TokenType.IDENTIFIER, "ab"),
    ]


def test_unknown_characters_are_ignored():
    tokens = _drain(_lex("#@ x"))
    assert [(t.type, t.value) for t in tokens] == [(TokenType.IDENTIFIER, "x")]


def test_blank_lines_are_skipped_but_counted():
    text = "\n   \n\t\nlet x;\n"
    lines = text.split("\n")
    token = _lex(text).next_token()
    assert token.type is TokenType.LET
    assert token.loc.line == lines.index("let x;") + 1


def test_tokens_span_lines():
    tokens = _drain(_lex("let a;\nexit a;\n"))
    assert [t.loc.line for t in tokens] == [1, 1, 1, 2, 2, 2]


def test_empty_input_gives_eof():
    token = _lex("").next_token()
    assert token.type is TokenType.EOF
    assert token.value == "EOF!"
    assert token.loc.column == 0


def test_eof_repeats_after_input_is_exhausted():
    lexer = _lex("x\n")
    assert lexer.next_token().value == "x"
    first = lexer.next_token()
    second = lexer.next_token()
    assert first.type is TokenType.EOF
    assert second == first


def test_peek_does_not_consume():
    lexer = _lex("let x = 5;")
    peeked = lexer.peek()
    assert lexer.peek() == peeked
    assert lexer.next_token() == peeked
    assert lexer.next_token().value == "x"


def test_peek_at_end_returns_eof():
    lexer = _lex("   \n")
    assert lexer.peek().type is TokenType.EOF


def test_saved_tokens_replayed_only_when_enabled():
    lexer = _lex("a b")
    saved = Token(TokenType.NUMBER, "9", Location(5, 5))
    lexer.save_token(saved)
    assert lexer.next_token().value == "a"
    lexer.use_save_buffer = True
    assert lexer.peek() == saved
    assert lexer.next_token() == saved
    assert lexer.next_token().value == "b"


def test_clear_save_buffer_drops_saved_tokens():
    lexer = _lex("a")
    lexer.use_save_buffer = True
    lexer.save_token(Token(TokenType.NUMBER, "1"))
    lexer.clear_save_buffer()
    assert lexer.next_token().value == "a"


@pytest.mark.parametrize(
    "text, expected",
    [("", True), (" \t\r\n\v\f", True), (" a ", False), ("x", False)],
)
def test_is_only_whitespace(text, expected):
    assert is_only_whitespace(text) is expected