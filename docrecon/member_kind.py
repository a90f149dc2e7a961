"""Kinds of documented entities and their member-id prefixes."""

from enum import Enum


class MemberKind(Enum):
    """What an identifier names."""

    TYPE = "type"
    METHOD = "method"
    FIELD = "field"
    PROPERTY = "property"
    EVENT = "event"

    @classmethod
    def from_prefix(cls, prefix: str) -> "MemberKind | None":
        """Map a member-id prefix letter (``T``, ``M``, ...) to a kind."""
        return PREFIXES.get(prefix)

    @classmethod
    def from_label(cls, label: str) -> "MemberKind":
        """Map a producer label such as ``"constructor"`` to a kind."""
        key = label.strip().lower()
        if key in {"constructor", "ctor", "operator"}:
            return cls.METHOD
        if key in {"class", "struct", "interface", "enum", "delegate"}:
            return cls.TYPE
        return cls(key)


PREFIXES: dict[str, MemberKind] = {
    "T": MemberKind.TYPE,
    "M": MemberKind.METHOD,
    "F": MemberKind.FIELD,
    "P": MemberKind.PROPERTY,
    "E": MemberKind.EVENT,
}
