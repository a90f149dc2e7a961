"""Token kinds and tokens produced by the identifier lexer."""

from dataclasses import dataclass
from enum import Enum


class NameTokenKind(Enum):
    """Closed set of token kinds in the member-id grammar."""

    ERROR = "error"
    EOI = "end of input"

    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"

    AT = "@"
    COMMA = ","
    COLON = ":"
    PERIOD = "."
    BACKTICK = "`"
    DOUBLE_BACKTICK = "``"
    SHARP = "#"
    DOUBLE_SHARP = "##"

    NAME = "name"
    NUMBER = "number"


@dataclass(frozen=True)
class NameToken:
    """A token: its kind and the slice of the source text it covers."""

    kind: NameTokenKind
    start: int
    length: int
    source: str

    @property
    def text(self) -> str:
        """Return the covered source text."""
        return self.source[self.start : self.start + self.length]

    def __str__(self) -> str:
        """Describe the token for debugging output."""
        return f'{self.kind.name}: (at {self.start} +{self.length}) "{self.text}"'
