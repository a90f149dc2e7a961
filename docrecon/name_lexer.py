"""Lexer for single-line member-id strings."""

import re

from docrecon.name_token import NameToken, NameTokenKind

NUMBER_RE = re.compile(r"[0-9]+")

PUNCTUATORS: dict[str, NameTokenKind] = {
    "(": NameTokenKind.LEFT_PAREN,
    ")": NameTokenKind.RIGHT_PAREN,
    "[": NameTokenKind.LEFT_BRACKET,
    "]": NameTokenKind.RIGHT_BRACKET,
    "{": NameTokenKind.LEFT_BRACE,
    "}": NameTokenKind.RIGHT_BRACE,
    "@": NameTokenKind.AT,
    ".": NameTokenKind.PERIOD,
    ",": NameTokenKind.COMMA,
    ":": NameTokenKind.COLON,
}

# Characters that may appear doubled, with their single and doubled kinds.
DOUBLING: dict[str, tuple[NameTokenKind, NameTokenKind]] = {
    "#": (NameTokenKind.SHARP, NameTokenKind.DOUBLE_SHARP),
    "`": (NameTokenKind.BACKTICK, NameTokenKind.DOUBLE_BACKTICK),
}


def _is_name_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_name_part(ch: str) -> bool:
    return ch == "_" or ch.isalpha() or ("0" <= ch <= "9")


class NameLexer:
    """Forward-only token stream over one identifier with one token of pushback."""

    def __init__(self, text: str) -> None:
        """Start scanning at the beginning of ``text``."""
        self.text = text
        self._pos = 0
        self._end = len(text)
        self.token = NameToken(NameTokenKind.EOI, 0, 0, text)
        self._pushback: NameToken | None = None

    def unget(self) -> None:
        """Make the next call to :meth:`next` return the current token again."""
        self._pushback = self.token

    def next(self) -> NameToken:
        """Return the next token, or the pushed-back one if present."""
        if self._pushback is not None:
            self.token, self._pushback = self._pushback, None
            return self.token
        self.token = self._scan()
        return self.token

    def _scan(self) -> NameToken:
        text = self.text
        while self._pos < self._end and ord(text[self._pos]) < 0x20:  # noqa: PLR2004
            self._pos += 1

        start = self._pos
        if start >= self._end:
            return NameToken(NameTokenKind.EOI, start, 0, text)

        ch = text[start]
        self._pos += 1

        kind = PUNCTUATORS.get(ch)
        if kind is not None:
            return NameToken(kind, start, 1, text)

        if ch in DOUBLING:
            single, double = DOUBLING[ch]
            if self._pos < self._end and text[self._pos] == ch:
                self._pos += 1
                return NameToken(double, start, 2, text)
            return NameToken(single, start, 1, text)

        if "0" <= ch <= "9":
            m = NUMBER_RE.match(text, start)
            if m:
                self._pos = m.end()
            return NameToken(NameTokenKind.NUMBER, start, self._pos - start, text)

        if _is_name_start(ch):
            while self._pos < self._end and _is_name_part(text[self._pos]):
                self._pos += 1
            return NameToken(NameTokenKind.NAME, start, self._pos - start, text)

        return NameToken(NameTokenKind.ERROR, start, 1, text)


def tokenize(text: str) -> list[NameToken]:
    """Lex ``text`` completely, including the trailing EOI token."""
    lexer = NameLexer(text)
    tokens = []
    while True:
        tok = lexer.next()
        tokens.append(tok)
        if tok.kind is NameTokenKind.EOI:
            return tokens
