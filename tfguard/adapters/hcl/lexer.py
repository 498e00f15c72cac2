"""
HCL lexer — turns native-syntax source text into positioned tokens.

Only what the parser needs to find block and attribute boundaries is
recognised precisely: identifiers, literals, brackets, ``=``/``:``/``,``
and newlines. Every other operator becomes a generic OPERATOR token.

Quoted strings and heredocs are decoded here. A string containing a
``${...}`` or ``%{...}`` sequence is a template and carries no decoded
value, because its result depends on evaluation context.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from tfguard.adapters.hcl.errors import HclSyntaxError
from tfguard.core.models.source import SourcePos


class TokenType(str, Enum):
    IDENT = "ident"
    NUMBER = "number"
    STRING = "string"
    HEREDOC = "heredoc"
    NEWLINE = "newline"
    LBRACE = "{"
    RBRACE = "}"
    LBRACK = "["
    RBRACK = "]"
    LPAREN = "("
    RPAREN = ")"
    EQUAL = "="
    COLON = ":"
    COMMA = ","
    OPERATOR = "operator"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    start: SourcePos
    end: SourcePos
    offset: int = 0                 # character offset of the token start
    value: str | None = None        # decoded literal for STRING/HEREDOC
    is_template: bool = False

    def __repr__(self) -> str:
        return f"<{self.type.name} {self.text!r} @{self.start.line}:{self.start.column}>"


_IDENT_RE = re.compile(r"[^\W\d][\w-]*")
_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_HEREDOC_RE = re.compile(r"<<(-?)([A-Za-z_][A-Za-z0-9_-]*)[ \t]*\r?\n")
_TEMPLATE_SEQ_RE = re.compile(r"(?<![$%])[$%]\{")

_SINGLE = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACK,
    "]": TokenType.RBRACK,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

# Longest first so "==" wins over "=" and "..." over "."
_OPERATORS = (
    "...", "==", "!=", "<=", ">=", "&&", "||", "=>",
    "!", "<", ">", "+", "-", "*", "/", "%", "?", ".",
)

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}


class Lexer:
    """Single-use tokenizer over one file's text."""

    def __init__(self, text: str, filename: str = "<memory>"):
        self._src = text
        self._filename = filename
        self._i = 0
        self._line = 1
        self._col = 1

    # ── Position helpers ──────────────────────────────────────────

    def _pos(self) -> SourcePos:
        return SourcePos(line=self._line, column=self._col)

    def _peek(self, ahead: int = 0) -> str:
        j = self._i + ahead
        return self._src[j] if j < len(self._src) else ""

    def _advance(self, count: int = 1) -> str:
        chunk = self._src[self._i:self._i + count]
        for ch in chunk:
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        self._i += len(chunk)
        return chunk

    def _error(self, message: str, pos: SourcePos | None = None) -> HclSyntaxError:
        return HclSyntaxError(message, self._filename, pos or self._pos())

    # ── Main loop ─────────────────────────────────────────────────

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while self._i < len(self._src):
            c = self._peek()

            if c in " \t\r\ufeff":
                self._advance()
                continue

            if c == "\n":
                start, offset = self._pos(), self._i
                self._advance()
                tokens.append(Token(TokenType.NEWLINE, "\n", start, self._pos(), offset))
                continue

            if c == "#" or (c == "/" and self._peek(1) == "/"):
                while self._i < len(self._src) and self._peek() != "\n":
                    self._advance()
                continue

            if c == "/" and self._peek(1) == "*":
                end = self._src.find("*/", self._i + 2)
                if end == -1:
                    raise self._error("Unterminated comment")
                self._advance(end + 2 - self._i)
                continue

            if c == '"':
                tokens.append(self._lex_string())
                continue

            if c == "<" and self._peek(1) == "<":
                tokens.append(self._lex_heredoc())
                continue

            if c in "0123456789":
                tokens.append(self._lex_regex(_NUMBER_RE, TokenType.NUMBER))
                continue

            if c.isalpha() or c == "_":
                tokens.append(self._lex_regex(_IDENT_RE, TokenType.IDENT))
                continue

            if c in _SINGLE:
                start, offset = self._pos(), self._i
                self._advance()
                tokens.append(Token(_SINGLE[c], c, start, self._pos(), offset))
                continue

            if c == "=" and self._peek(1) not in ("=", ">"):
                start, offset = self._pos(), self._i
                self._advance()
                tokens.append(Token(TokenType.EQUAL, "=", start, self._pos(), offset))
                continue

            op = next((o for o in _OPERATORS if self._src.startswith(o, self._i)), None)
            if op is None:
                raise self._error(f"Invalid character {c!r}")
            start, offset = self._pos(), self._i
            self._advance(len(op))
            tokens.append(Token(TokenType.OPERATOR, op, start, self._pos(), offset))

        pos = self._pos()
        tokens.append(Token(TokenType.EOF, "", pos, pos, self._i))
        return tokens

    def _lex_regex(self, pattern: re.Pattern[str], token_type: TokenType) -> Token:
        m = pattern.match(self._src, self._i)
        if m is None:
            raise self._error(f"Invalid {token_type.value} starting with {self._peek()!r}")
        start, offset = self._pos(), self._i
        text = self._advance(len(m.group(0)))
        return Token(token_type, text, start, self._pos(), offset)

    # ── Quoted strings ────────────────────────────────────────────

    def _lex_string(self) -> Token:
        start, offset = self._pos(), self._i
        self._advance()  # opening quote
        chars: list[str] = []
        is_template = False

        while True:
            c = self._peek()
            if c == "" or c == "\n":
                raise self._error("Unterminated template string", start)
            if c == '"':
                self._advance()
                break
            if c == "\\":
                chars.append(self._lex_escape())
                continue
            if c in "$%" and self._peek(1) == c and self._peek(2) == "{":
                # "$${" and "%%{" are literal "${" and "%{"
                chars.append(c + "{")
                self._advance(3)
                continue
            if c in "$%" and self._peek(1) == "{":
                is_template = True
                self._skip_interpolation()
                continue
            chars.append(self._advance())

        text = self._src[offset:self._i]
        value = None if is_template else "".join(chars)
        return Token(TokenType.STRING, text, start, self._pos(), offset, value, is_template)

    def _lex_escape(self) -> str:
        pos = self._pos()
        self._advance()  # backslash
        c = self._advance()
        if c in _ESCAPES:
            return _ESCAPES[c]
        if c in ("u", "U"):
            width = 4 if c == "u" else 8
            digits = self._src[self._i:self._i + width]
            if len(digits) != width or not all(d in "0123456789abcdefABCDEF" for d in digits):
                raise self._error("Invalid unicode escape", pos)
            self._advance(width)
            return chr(int(digits, 16))
        raise self._error(f"Invalid escape sequence \\{c}", pos)

    def _skip_interpolation(self) -> None:
        """Skip a ``${ ... }`` or ``%{ ... }`` sequence, nested strings included."""
        start = self._pos()
        self._advance(2)
        depth = 1
        while depth:
            c = self._peek()
            if c == "":
                raise self._error("Unterminated template interpolation", start)
            if c == '"':
                self._lex_string()
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
            self._advance()

    # ── Heredocs ──────────────────────────────────────────────────

    def _lex_heredoc(self) -> Token:
        start, offset = self._pos(), self._i
        m = _HEREDOC_RE.match(self._src, self._i)
        if m is None:
            raise self._error("Invalid heredoc introducer")
        flush, marker = m.group(1) == "-", m.group(2)
        self._advance(len(m.group(0)))

        lines: list[str] = []
        while True:
            if self._i >= len(self._src):
                raise self._error(f"Unterminated heredoc, expected {marker}", start)
            nl = self._src.find("\n", self._i)
            line_end = len(self._src) if nl == -1 else nl
            line = self._src[self._i:line_end]
            if line.strip() == marker:
                # Consume the marker but leave the newline for the parser
                self._advance(len(line.rstrip("\r")))
                break
            lines.append(line.rstrip("\r"))
            self._advance(line_end - self._i + (0 if nl == -1 else 1))

        if flush:
            lines = _dedent(lines)
        body = "".join(line + "\n" for line in lines)
        text = self._src[offset:self._i]

        is_template = _TEMPLATE_SEQ_RE.search(body) is not None
        value = None if is_template else body.replace("$${", "${").replace("%%{", "%{")
        return Token(TokenType.HEREDOC, text, start, self._pos(), offset, value, is_template)


def _dedent(lines: list[str]) -> list[str]:
    indents = [len(line) - len(line.lstrip(" \t")) for line in lines if line.strip()]
    if not indents:
        return lines
    cut = min(indents)
    return [line[cut:] for line in lines]


def tokenize(text: str, filename: str = "<memory>") -> list[Token]:
    """Tokenize ``text``; raises HclSyntaxError on malformed input."""
    return Lexer(text, filename).tokenize()
