"""Bit-set flags describing names and parameters."""

from enum import IntFlag


class NameFlags(IntFlag):
    """Visibility, modifier and member-kind bits attached to an identifier."""

    PRIVATE = 1 << 0
    PROTECTED = 1 << 1
    INTERNAL = 1 << 2
    PUBLIC = 1 << 3

    ALL_VISIBILITIES = PUBLIC | INTERNAL | PROTECTED | PRIVATE

    STATIC = 1 << 4
    SEALED = 1 << 5
    ABSTRACT = 1 << 6
    VIRTUAL = 1 << 7
    NEW = 1 << 8

    CONST = 1 << 9
    READONLY = 1 << 10

    METHOD = 1 << 16
    CLASS_CONSTRUCTOR = 1 << 17
    CONSTRUCTOR = 1 << 18
    SPECIAL_NAME = 1 << 19
    EXPLICIT_INTERFACE_IMPLEMENTATION = 1 << 20


# Rendering order for the modifier prefix of a stringified identifier.
MODIFIER_WORDS: tuple[tuple[NameFlags, str], ...] = (
    (NameFlags.PRIVATE, "private"),
    (NameFlags.PROTECTED, "protected"),
    (NameFlags.INTERNAL, "internal"),
    (NameFlags.PUBLIC, "public"),
    (NameFlags.STATIC, "static"),
    (NameFlags.SEALED, "sealed"),
    (NameFlags.ABSTRACT, "abstract"),
    (NameFlags.VIRTUAL, "virtual"),
    (NameFlags.NEW, "new"),
    (NameFlags.CONST, "const"),
    (NameFlags.READONLY, "readonly"),
)

CALLABLE_FLAGS = NameFlags.METHOD | NameFlags.CONSTRUCTOR | NameFlags.CLASS_CONSTRUCTOR


class ParameterKind(IntFlag):
    """How an argument is passed."""

    IN = 1 << 0
    OUT = 1 << 1
    REF = 1 << 2
    OPTIONAL = 1 << 3
    HAS_DEFAULT_VALUE = 1 << 4


def flags_from_names(names: list[str] | str | int | None) -> NameFlags:
    """Build NameFlags from a list of names like ``["public", "static"]``."""
    if names is None:
        return NameFlags(0)
    if isinstance(names, int):
        return NameFlags(names)
    if isinstance(names, str):
        names = [names]
    result = NameFlags(0)
    for n in names:
        key = str(n).strip().upper().replace("-", "_")
        try:
            result |= NameFlags[key]
        except KeyError:
            msg = f"Unknown name flag: {n!r}"
            raise ValueError(msg) from None
    return result


def kind_from_names(names: list[str] | str | int | None) -> ParameterKind:
    """Build a ParameterKind from names like ``"out"`` or ``["ref"]``."""
    if names is None:
        return ParameterKind(0)
    if isinstance(names, int):
        return ParameterKind(names)
    if isinstance(names, str):
        names = [names]
    result = ParameterKind(0)
    for n in names:
        key = str(n).strip().upper().replace("-", "_")
        try:
            result |= ParameterKind[key]
        except KeyError:
            msg = f"Unknown parameter kind: {n!r}"
            raise ValueError(msg) from None
    return result
