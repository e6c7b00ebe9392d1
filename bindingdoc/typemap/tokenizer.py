"""Tokenizer for native type expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List


class TokenKind(str, Enum):
    IDENT = "ident"
    LIFETIME = "lifetime"
    PATH_SEP = "::"
    LT = "<"
    GT = ">"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    SEMI = ";"
    AMP = "&"
    STAR = "*"
    PLUS = "+"
    EQ = "="
    BANG = "!"
    OTHER = "other"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int


_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<lifetime>'[A-Za-z_][A-Za-z0-9_]*)
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*|[0-9]+)
    | (?P<path_sep>::)
    | (?P<punct>[<>()\[\],;&*+=!])
    | (?P<other>.)
    """,
    re.VERBOSE,
)

_PUNCT_KINDS = {
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMI,
    "&": TokenKind.AMP,
    "*": TokenKind.STAR,
    "+": TokenKind.PLUS,
    "=": TokenKind.EQ,
    "!": TokenKind.BANG,
}


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tokens; whitespace is insignificant and dropped."""
    tokens: List[Token] = []
    for match in _TOKEN_PATTERN.finditer(text):
        group = match.lastgroup
        value = match.group()
        if group == "ws":
            continue
        if group == "lifetime":
            tokens.append(Token(TokenKind.LIFETIME, value, match.start()))
        elif group == "ident":
            tokens.append(Token(TokenKind.IDENT, value, match.start()))
        elif group == "path_sep":
            tokens.append(Token(TokenKind.PATH_SEP, value, match.start()))
        elif group == "punct":
            tokens.append(Token(_PUNCT_KINDS[value], value, match.start()))
        else:
            tokens.append(Token(TokenKind.OTHER, value, match.start()))
    tokens.append(Token(TokenKind.EOF, "", len(text)))
    return tokens


__all__ = ["Token", "TokenKind", "tokenize"]
