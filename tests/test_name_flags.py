"""Tests for flag helpers and member kinds."""

import pytest

from docrecon.member_kind import MemberKind
from docrecon.name_flags import (
    NameFlags,
    ParameterKind,
    flags_from_names,
    kind_from_names,
)


def test_flags_from_names() -> None:
    """Verify conversion from names, strings, integers and None."""
    assert flags_from_names(["public", "static"]) == NameFlags.PUBLIC | NameFlags.STATIC
    assert flags_from_names("explicit-interface-implementation") == (
        NameFlags.EXPLICIT_INTERFACE_IMPLEMENTATION
    )
    assert flags_from_names(int(NameFlags.SEALED)) == NameFlags.SEALED
    assert flags_from_names(None) == NameFlags(0)
    with pytest.raises(ValueError, match="Unknown name flag"):
        flags_from_names(["shiny"])


def test_kind_from_names() -> None:
    """Verify conversion of parameter passing kinds."""
    assert kind_from_names("out") == ParameterKind.OUT
    assert kind_from_names(["in", "optional"]) == (
        ParameterKind.IN | ParameterKind.OPTIONAL
    )
    with pytest.raises(ValueError, match="Unknown parameter kind"):
        kind_from_names("byref")


def test_all_visibilities() -> None:
    """Verify the combined visibility mask."""
    for flag in (
        NameFlags.PRIVATE,
        NameFlags.PROTECTED,
        NameFlags.INTERNAL,
        NameFlags.PUBLIC,
    ):
        assert flag & NameFlags.ALL_VISIBILITIES
    assert not NameFlags.STATIC & NameFlags.ALL_VISIBILITIES


def test_member_kind_labels_and_prefixes() -> None:
    """Verify producer labels and member-id prefixes."""
    assert MemberKind.from_label("Constructor") is MemberKind.METHOD
    assert MemberKind.from_label("struct") is MemberKind.TYPE
    assert MemberKind.from_label("field") is MemberKind.FIELD
    assert MemberKind.from_prefix("E") is MemberKind.EVENT
    assert MemberKind.from_prefix("N") is None
    with pytest.raises(ValueError):
        MemberKind.from_label("namespace")
