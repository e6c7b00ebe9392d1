"""Recursive-descent parser for native type expressions."""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    AssocBinding,
    GenericArg,
    Lifetime,
    NeverType,
    PathType,
    PointerType,
    ReferenceType,
    SliceType,
    TraitObjectType,
    TupleType,
    TypeNode,
)
from .tokenizer import Token, TokenKind, tokenize

# Type trees never nest deeper than this; deeper input is a syntax error.
MAX_NESTING = 64


class TypeSyntaxError(ValueError):
    """Raised when a type expression cannot be parsed."""

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(f"{message} at position {token.position} ({token.text!r})")
        self.token = token


class _Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    # Token helpers -------------------------------------------------------
    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def accept(self, kind: TokenKind) -> Optional[Token]:
        if self.peek().kind is kind:
            return self.advance()
        return None

    def expect(self, kind: TokenKind) -> Token:
        token = self.peek()
        if token.kind is not kind:
            raise TypeSyntaxError(f"expected {kind.value!r}", token)
        return self.advance()

    def accept_keyword(self, word: str) -> bool:
        token = self.peek()
        if token.kind is TokenKind.IDENT and token.text == word:
            self.advance()
            return True
        return False

    # Grammar -------------------------------------------------------------
    def parse(self) -> TypeNode:
        node = self.parse_type()
        token = self.peek()
        if token.kind is not TokenKind.EOF:
            raise TypeSyntaxError("unexpected trailing input", token)
        return node

    def parse_type(self) -> TypeNode:
        if self.depth >= MAX_NESTING:
            raise TypeSyntaxError(f"nesting deeper than {MAX_NESTING} levels", self.peek())
        self.depth += 1
        try:
            return self.parse_unnested_type()
        finally:
            self.depth -= 1

    def parse_unnested_type(self) -> TypeNode:
        token = self.peek()
        kind = token.kind

        if kind is TokenKind.AMP:
            return self.parse_reference()
        if kind is TokenKind.STAR:
            return self.parse_pointer()
        if kind is TokenKind.LPAREN:
            return self.parse_tuple()
        if kind is TokenKind.LBRACKET:
            return self.parse_slice()
        if kind is TokenKind.BANG:
            self.advance()
            return NeverType()
        if kind is TokenKind.IDENT and token.text in ("dyn", "impl"):
            return self.parse_trait_object()
        if kind in (TokenKind.IDENT, TokenKind.PATH_SEP):
            return self.parse_path()
        raise TypeSyntaxError("expected a type", token)

    def parse_reference(self) -> ReferenceType:
        self.expect(TokenKind.AMP)
        lifetime = self.accept(TokenKind.LIFETIME)
        mutable = self.accept_keyword("mut")
        inner = self.parse_type()
        return ReferenceType(
            inner=inner,
            lifetime=lifetime.text if lifetime else None,
            mutable=mutable,
        )

    def parse_pointer(self) -> PointerType:
        self.expect(TokenKind.STAR)
        mutable = self.accept_keyword("mut")
        if not mutable:
            self.accept_keyword("const")
        return PointerType(inner=self.parse_type(), mutable=mutable)

    def parse_tuple(self) -> TypeNode:
        self.expect(TokenKind.LPAREN)
        elements: List[TypeNode] = []
        trailing_comma = False
        while self.peek().kind is not TokenKind.RPAREN:
            elements.append(self.parse_type())
            trailing_comma = self.accept(TokenKind.COMMA) is not None
            if not trailing_comma:
                break
        self.expect(TokenKind.RPAREN)
        # ``(T)`` is just a parenthesised type.
        if len(elements) == 1 and not trailing_comma:
            return elements[0]
        return TupleType(elements=elements)

    def parse_slice(self) -> SliceType:
        self.expect(TokenKind.LBRACKET)
        element = self.parse_type()
        length: Optional[str] = None
        if self.accept(TokenKind.SEMI):
            parts: List[str] = []
            while self.peek().kind not in (TokenKind.RBRACKET, TokenKind.EOF):
                parts.append(self.advance().text)
            length = "".join(parts)
        self.expect(TokenKind.RBRACKET)
        return SliceType(element=element, length=length)

    def parse_trait_object(self) -> TraitObjectType:
        keyword = self.advance().text
        bounds: List[GenericArg] = [self.parse_bound()]
        while self.accept(TokenKind.PLUS):
            bounds.append(self.parse_bound())
        return TraitObjectType(keyword=keyword, bounds=bounds)

    def parse_bound(self) -> GenericArg:
        lifetime = self.accept(TokenKind.LIFETIME)
        if lifetime is not None:
            return Lifetime(lifetime.text)
        return self.parse_path()

    def parse_path(self) -> PathType:
        self.accept(TokenKind.PATH_SEP)
        segments = [self.expect(TokenKind.IDENT).text]
        args: List[GenericArg] = []
        subscript = False

        while True:
            if self.peek().kind is TokenKind.PATH_SEP:
                self.advance()
                # Turbofish: ``Vec::<T>``.
                if self.peek().kind is TokenKind.LT:
                    args = self.parse_generic_args(TokenKind.LT, TokenKind.GT)
                    break
                segments.append(self.expect(TokenKind.IDENT).text)
                # Generic arguments on an inner segment belong to that segment
                # only; they are dropped along with the qualification.
                args = []
                continue
            if self.peek().kind is TokenKind.LT:
                args = self.parse_generic_args(TokenKind.LT, TokenKind.GT)
                if self.peek().kind is TokenKind.PATH_SEP:
                    continue
                break
            if self.peek().kind is TokenKind.LBRACKET:
                args = self.parse_generic_args(TokenKind.LBRACKET, TokenKind.RBRACKET)
                subscript = True
            break

        return PathType(segments=segments, args=args, subscript=subscript)

    def parse_generic_args(self, opening: TokenKind, closing: TokenKind) -> List[GenericArg]:
        self.expect(opening)
        args: List[GenericArg] = []
        while self.peek().kind is not closing:
            args.append(self.parse_generic_arg())
            if not self.accept(TokenKind.COMMA):
                break
        self.expect(closing)
        return args

    def parse_generic_arg(self) -> GenericArg:
        token = self.peek()
        if token.kind is TokenKind.LIFETIME:
            self.advance()
            return Lifetime(token.text)
        if token.kind is TokenKind.IDENT and self.peek(1).kind is TokenKind.EQ:
            self.advance()
            self.advance()
            return AssocBinding(name=token.text, value=self.parse_type())
        return self.parse_type()


def parse_type(text: str) -> TypeNode:
    """Parse ``text`` into a type tree, raising ``TypeSyntaxError`` on failure."""
    return _Parser(tokenize(text)).parse()


__all__ = ["MAX_NESTING", "TypeSyntaxError", "parse_type"]
