"""Tokenizer for NIR source text."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    EOF = 0
    EMPTY = auto()
    LBRACE = auto()
    RBRACE = auto()
    LPAREN = auto()
    RPAREN = auto()
    EQUALS = auto()
    SEMICOLON = auto()
    PLUS = auto()
    MINUS = auto()
    MULT = auto()
    DIV = auto()
    LET = auto()
    DEFINE = auto()
    IDENTIFIER = auto()
    EXIT = auto()
    NUMBER = auto()


@dataclass(frozen=True)
class Location:
    """A 1-based line and column in the source."""

    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Token:
    """A single lexical token."""

    type: TokenType
    value: str = ""
    loc: Location = Location()


EOF_VALUE = "EOF!"

_KEYWORDS = {
    "exit": TokenType.EXIT,
    "let": TokenType.LET,
    "def": TokenType.DEFINE,
}

_SYMBOLS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "=": TokenType.EQUALS,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULT,
    "/": TokenType.DIV,
}

_WHITESPACE = frozenset(" \t\n\v\f\r")

# Digit runs, identifiers (letter then letters/digits), or any single character.
_LEXEME = re.compile(r"(?P<number>[0-9]+)|(?P<word>[A-Za-z][A-Za-z0-9]*)|.", re.DOTALL)


def is_only_whitespace(text: str) -> bool:
    """Return True if ``text`` holds nothing but whitespace (or nothing at all)."""
    return all(char in _WHITESPACE for char in text)


class Lexer:
    """Reads tokens line by line from an iterable of source lines."""

    def __init__(self, source: Iterable[str]) -> None:
        self._lines = iter(source)
        self._line = 0
        self._tokens: deque[Token] = deque()
        self._saved: deque[Token] = deque()
        self.use_save_buffer = False

    def _eof(self) -> Token:
        return Token(TokenType.EOF, EOF_VALUE, Location(self._line, 0))

    def _fill(self) -> bool:
        """Tokenize the next non-blank line; return False at end of input."""
        while True:
            raw = next(self._lines, None)
            if raw is None:
                return False
            self._line += 1
            line = raw.rstrip("\n")
            if line and not is_only_whitespace(line):
                self._tokenize(line)
                return True

    def _tokenize(self, line: str) -> None:
        for match in _LEXEME.finditer(line):
            column = match.end()
            text = match.group()
            if match.lastgroup == "number":
                self._tokens.append(Token(TokenType.NUMBER, text, Location(self._line, column)))
            elif match.lastgroup == "word":
                kind = _KEYWORDS.get(text, TokenType.IDENTIFIER)
                self._tokens.append(Token(kind, text, Location(self._line, column)))
            elif text in _SYMBOLS:
                self._tokens.append(Token(_SYMBOLS[text], text, Location(self._line, column)))

    def _front(self, consume: bool) -> Token:
        if self.use_save_buffer and self._saved:
            return self._saved.popleft() if consume else self._saved[0]
        fallback = self._eof()
        if not self._tokens and not self._fill():
            return self._eof()
        if not self._tokens:
            return fallback
        return self._tokens.popleft() if consume else self._tokens[0]

    def next_token(self) -> Token:
        """Return and consume the next token; an EOF token once input runs out."""
        return self._front(consume=True)

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        return self._front(consume=False)

    def save_token(self, token: Token) -> None:
        """Queue a token to be replayed while ``use_save_buffer`` is set."""
        self._saved.append(token)

    def clear_save_buffer(self) -> None:
        """Drop every saved token."""
        self._saved.clear()