"""
HCL parser — builds the document tree the rules walk.

Grammar handled (HCL native syntax, structural subset)::

    body       = { attribute | block }
    attribute  = IDENT "=" expression NEWLINE
    block      = IDENT { STRING | IDENT } "{" body "}"
    expression = literal | object | tuple | <balanced token run>

Structure is parsed exactly; expressions are parsed exactly only when
they are literal constructors. Anything else is captured as a balanced
run of tokens up to the end of the attribute, which is enough to know
where it sits and that it cannot be evaluated statically.
"""

from __future__ import annotations

import logging

from tfguard.adapters.base import Attribute, Block, Document, Expression, Value
from tfguard.adapters.hcl.errors import HclSyntaxError
from tfguard.adapters.hcl.expressions import (
    LiteralExpression,
    ObjectExpression,
    OpaqueExpression,
    TupleExpression,
)
from tfguard.adapters.hcl.lexer import Token, TokenType, tokenize
from tfguard.core.models.source import SourcePos, SourceRange

logger = logging.getLogger(__name__)

_OPENERS = frozenset({TokenType.LBRACE, TokenType.LBRACK, TokenType.LPAREN})
_CLOSERS = frozenset({TokenType.RBRACE, TokenType.RBRACK, TokenType.RPAREN})
_ITEM_STOP = frozenset({TokenType.COMMA})
_KEY_STOP = frozenset({TokenType.EQUAL, TokenType.COLON})
_NO_STOP: frozenset[TokenType] = frozenset()

_KEYWORDS = {
    "true": Value("bool", True),
    "false": Value("bool", False),
    "null": Value.null(),
}


class Parser:
    """Recursive-descent parser over one file's token stream."""

    def __init__(self, text: str, filename: str):
        self._text = text
        self._filename = filename
        self._tokens = tokenize(text, filename)
        self._i = 0

    # ── Token helpers ─────────────────────────────────────────────

    def _peek(self, ahead: int = 0) -> Token:
        j = min(self._i + ahead, len(self._tokens) - 1)
        return self._tokens[j]

    def _next(self) -> Token:
        tok = self._tokens[self._i]
        if tok.type is not TokenType.EOF:
            self._i += 1
        return tok

    def _skip_newlines(self) -> None:
        while self._peek().type is TokenType.NEWLINE:
            self._i += 1

    def _expect(self, token_type: TokenType, what: str) -> Token:
        tok = self._peek()
        if tok.type is not token_type:
            raise self._error(f"Expected {what}, found {_describe(tok)}", tok.start)
        return self._next()

    def _error(self, message: str, pos: SourcePos) -> HclSyntaxError:
        return HclSyntaxError(message, self._filename, pos)

    def _range(self, start: Token, end: Token) -> SourceRange:
        return SourceRange(filename=self._filename, start=start.start, end=end.end)

    # ── Bodies ────────────────────────────────────────────────────

    def parse_document(self) -> Document:
        attributes, blocks = self._parse_body(TokenType.EOF)
        return Document(filename=self._filename, blocks=blocks, attributes=attributes)

    def _parse_body(self, closing: TokenType) -> tuple[dict[str, Attribute], tuple[Block, ...]]:
        attributes: dict[str, Attribute] = {}
        blocks: list[Block] = []

        while True:
            self._skip_newlines()
            tok = self._peek()
            if tok.type is closing:
                break
            if tok.type is TokenType.EOF:
                raise self._error("Unclosed configuration block", tok.start)
            if tok.type is not TokenType.IDENT:
                raise self._error(
                    f"Expected an attribute or block definition, found {_describe(tok)}",
                    tok.start,
                )

            name = self._next()
            if self._peek().type is TokenType.EQUAL:
                self._next()
                expr = self._parse_expression(_NO_STOP, newline_ends=True)
                if name.text in attributes:
                    raise self._error(f'Attribute "{name.text}" redefined', name.start)
                attributes[name.text] = Attribute(
                    name=name.text,
                    expr=expr,
                    range=SourceRange(
                        filename=self._filename, start=name.start, end=expr.range.end
                    ),
                )
            else:
                blocks.append(self._parse_block(name))

            self._end_of_item(closing)

        return attributes, tuple(blocks)

    def _parse_block(self, type_tok: Token) -> Block:
        labels: list[str] = []
        while True:
            tok = self._peek()
            if tok.type is TokenType.IDENT:
                labels.append(self._next().text)
            elif tok.type is TokenType.STRING:
                if tok.is_template:
                    raise self._error("Block labels may not contain template sequences", tok.start)
                labels.append(self._next().value or "")
            else:
                break

        self._expect(TokenType.LBRACE, f'"{{" to open the "{type_tok.text}" block')
        attributes, blocks = self._parse_body(TokenType.RBRACE)
        close = self._expect(TokenType.RBRACE, f'"}}" to close the "{type_tok.text}" block')

        return Block(
            type=type_tok.text,
            labels=tuple(labels),
            attributes=attributes,
            blocks=blocks,
            range=self._range(type_tok, close),
        )

    def _end_of_item(self, closing: TokenType) -> None:
        tok = self._peek()
        if tok.type in (TokenType.NEWLINE, TokenType.EOF) or tok.type is closing:
            return
        raise self._error(
            f"Expected a newline after the definition, found {_describe(tok)}", tok.start
        )

    # ── Expressions ───────────────────────────────────────────────

    def _parse_expression(self, stop: frozenset[TokenType], newline_ends: bool) -> Expression:
        first = self._peek()
        if first.type in stop or first.type in _CLOSERS or first.type in (
            TokenType.NEWLINE, TokenType.EOF,
        ):
            raise self._error("Missing expression", first.start)

        literal = self._parse_literal()
        if literal is not None and self._at_expression_end(stop, newline_ends):
            return literal

        last = self._consume_raw(stop, newline_ends) or self._tokens[self._i - 1]
        text = self._text[first.offset:last.offset + len(last.text)]
        return OpaqueExpression(text, self._range(first, last))

    def _parse_literal(self) -> Expression | None:
        """Parse a literal constructor at the cursor, if there is one.

        Returns None (having consumed nothing, or only a template token)
        when the expression is not a literal.
        """
        tok = self._peek()

        if tok.type in (TokenType.STRING, TokenType.HEREDOC):
            self._next()
            if tok.is_template:
                return None
            return LiteralExpression(Value.string(tok.value or ""), self._range(tok, tok))

        if tok.type is TokenType.NUMBER:
            self._next()
            number = float(tok.text) if any(c in tok.text for c in ".eE") else int(tok.text)
            return LiteralExpression(Value("number", number), self._range(tok, tok))

        if tok.type is TokenType.IDENT and tok.text in _KEYWORDS:
            self._next()
            return LiteralExpression(_KEYWORDS[tok.text], self._range(tok, tok))

        if tok.type is TokenType.LBRACE and not self._starts_for_expression():
            return self._parse_object()

        if tok.type is TokenType.LBRACK and not self._starts_for_expression():
            return self._parse_tuple()

        return None

    def _starts_for_expression(self) -> bool:
        j = self._i + 1
        while self._tokens[j].type is TokenType.NEWLINE:
            j += 1
        tok, after = self._tokens[j], self._tokens[min(j + 1, len(self._tokens) - 1)]
        return tok.type is TokenType.IDENT and tok.text == "for" and after.type is TokenType.IDENT

    def _parse_object(self) -> Expression:
        open_tok = self._next()
        items: list[tuple[str | None, Expression]] = []

        while True:
            self._skip_newlines()
            if self._peek().type is TokenType.RBRACE:
                close = self._next()
                break

            key_tok = self._peek()
            key: str | None
            if key_tok.type is TokenType.IDENT and self._peek(1).type in _KEY_STOP:
                key = self._next().text
            elif (
                key_tok.type is TokenType.STRING
                and not key_tok.is_template
                and self._peek(1).type in _KEY_STOP
            ):
                key = self._next().value
            else:
                key = None
                if self._consume_raw(_KEY_STOP, newline_ends=True) is None:
                    raise self._error("Missing key/value separator", key_tok.start)

            if self._peek().type not in _KEY_STOP:
                tok = self._peek()
                raise self._error(
                    f'Expected "=" or ":" after object key, found {_describe(tok)}', tok.start
                )
            self._next()

            value = self._parse_expression(_ITEM_STOP, newline_ends=True)
            items.append((key, value))

            tok = self._peek()
            if tok.type is TokenType.COMMA:
                self._next()
            elif tok.type not in (TokenType.NEWLINE, TokenType.RBRACE):
                raise self._error(
                    f"Missing attribute separator in object, found {_describe(tok)}", tok.start
                )

        return ObjectExpression(items, self._range(open_tok, close))

    def _parse_tuple(self) -> Expression:
        open_tok = self._next()
        items: list[Expression] = []

        while True:
            self._skip_newlines()
            if self._peek().type is TokenType.RBRACK:
                close = self._next()
                break

            items.append(self._parse_expression(_ITEM_STOP, newline_ends=False))

            self._skip_newlines()
            tok = self._peek()
            if tok.type is TokenType.COMMA:
                self._next()
            elif tok.type is not TokenType.RBRACK:
                raise self._error(
                    f"Missing item separator in tuple, found {_describe(tok)}", tok.start
                )

        return TupleExpression(items, self._range(open_tok, close))

    def _at_expression_end(self, stop: frozenset[TokenType], newline_ends: bool) -> bool:
        j = self._i
        if not newline_ends:
            while self._tokens[j].type is TokenType.NEWLINE:
                j += 1
        tok = self._tokens[j]
        if tok.type is TokenType.NEWLINE:
            return True
        return tok.type is TokenType.EOF or tok.type in stop or tok.type in _CLOSERS

    def _consume_raw(self, stop: frozenset[TokenType], newline_ends: bool) -> Token | None:
        """Consume a balanced token run; return the last token taken."""
        depth = 0
        last: Token | None = None
        while True:
            tok = self._peek()
            if tok.type is TokenType.EOF:
                if depth:
                    raise self._error("Unclosed bracket in expression", tok.start)
                return last
            if depth == 0:
                if tok.type in stop:
                    return last
                if tok.type is TokenType.NEWLINE and newline_ends:
                    return last
            if tok.type in _OPENERS:
                depth += 1
            elif tok.type in _CLOSERS:
                if depth == 0:
                    return last
                depth -= 1
            taken = self._next()
            if taken.type is not TokenType.NEWLINE:
                last = taken


def _describe(tok: Token) -> str:
    if tok.type is TokenType.EOF:
        return "end of file"
    if tok.type is TokenType.NEWLINE:
        return "newline"
    return repr(tok.text)


def parse(text: str, filename: str = "<memory>") -> Document:
    """Parse one file's text into a Document.

    Raises:
        HclSyntaxError: If the text is not valid HCL native syntax.
    """
    document = Parser(text, filename).parse_document()
    logger.debug(
        "Parsed %s: %d blocks, %d attributes",
        filename, len(document.blocks), len(document.attributes),
    )
    return document
