"""Tests for reconciling structural and documentation collections."""

import logging

import pytest

from docrecon.build_documentation import build_documentation_collection
from docrecon.build_structural import build_structural_collection
from docrecon.doc_parts import TypeParameterDoc
from docrecon.merge import merge_collections
from docrecon.metadata import Metadata
from docrecon.name_flags import NameFlags, ParameterKind
from docrecon.name_parser import parse_identifier
from docrecon.records import DocumentationRecord, ParameterShape, StructuralRecord
from docrecon.type_collection import TypeCollection

FIND_KEY = "Find(System.Int32, System.String)"


def widget_structure() -> TypeCollection:
    """Build the structural side: Ns.Widget with Find(Int32 a, String b)."""
    return build_structural_collection(
        [
            StructuralRecord("type", "Ns.Widget", flags=NameFlags.PUBLIC),
            StructuralRecord(
                "method",
                "Ns.Widget.Find",
                flags=NameFlags.PUBLIC,
                parameters=(
                    ParameterShape("System.Int32", "a"),
                    ParameterShape("System.String", "b"),
                ),
            ),
        ]
    )


def widget_documentation() -> TypeCollection:
    """Build the documentation side with a summary and a 'key' parameter."""
    return build_documentation_collection(
        [
            DocumentationRecord(
                "M:Ns.Widget.Find(System.Int32,System.String)",
                summary="Finds a widget.",
                parameters=(("key", "The lookup key."),),
            ),
        ]
    )


def test_documented_text_attaches_to_structural_signature() -> None:
    """Verify that structure wins for signatures and documentation for text."""
    merged = merge_collections(widget_structure(), widget_documentation())

    widget = merged.lookup(parse_identifier("Ns.Widget"))
    assert widget.identifier.flags & NameFlags.PUBLIC
    find = widget.methods[FIND_KEY]
    assert find.metadata == Metadata(summary="Finds a widget.")
    assert [p.name for p in find.parameters] == ["a", "b", "key"]
    assert [str(p.parameter_type) for p in find.parameters[:2]] == [
        "System.Int32",
        "System.String",
    ]
    assert find.parameters[2].parameter_type is None
    assert find.parameters[2].description == "The lookup key."
    assert str(find.identifier) == "Ns.Widget.Find(System.Int32 a, System.String b)"


def test_documentation_only_type_is_inserted_in_order() -> None:
    """Verify that an undocumented-in-structure type appears verbatim."""
    documentation = build_documentation_collection(
        [DocumentationRecord("T:Ns.Zeta", summary="Only documented.")]
    )
    structural = build_structural_collection([StructuralRecord("type", "Ns.Alpha")])

    merged = merge_collections(structural, documentation)

    assert [str(t) for t in merged] == ["Ns.Alpha", "Ns.Zeta"]
    zeta = merged.lookup(parse_identifier("Ns.Zeta"))
    assert zeta == documentation.lookup(parse_identifier("Ns.Zeta"))


def test_structural_type_without_documentation_passes_through() -> None:
    """Verify that an undocumented structural type is unchanged."""
    structural = widget_structure()
    merged = merge_collections(structural, TypeCollection())
    assert merged == structural


def test_merge_with_itself_is_identity() -> None:
    """Verify merge(X, X) == X."""
    structural = widget_structure()
    assert merge_collections(structural, structural) == structural
    documented = merge_collections(structural, widget_documentation())
    assert merge_collections(documented, documented) == documented


def test_merging_documentation_twice_changes_nothing() -> None:
    """Verify that re-applying the same documentation is stable."""
    documentation = widget_documentation()
    once = merge_collections(widget_structure(), documentation)
    assert merge_collections(once, documentation) == once


def test_generic_spellings_reconcile() -> None:
    """Verify matching of real generic names against back-references."""
    structural = build_structural_collection(
        [
            StructuralRecord("class", "Ns.Widget`1", generic_names=("T",)),
            StructuralRecord(
                "method",
                "Ns.Widget`1.Build",
                generic_names=("T",),
                parameters=(
                    ParameterShape("T[]", "items"),
                    ParameterShape("T", "result", ParameterKind.OUT),
                ),
            ),
        ]
    )
    documentation = build_documentation_collection(
        [
            DocumentationRecord(
                "T:Ns.Widget`1",
                summary="A widget.",
                type_parameters=(("T", "Element type."),),
            ),
            DocumentationRecord(
                "M:Ns.Widget`1.Build(`0[0:],`0@)",
                summary="Builds.",
                parameters=(("items", "The items."),),
            ),
        ]
    )

    merged = merge_collections(structural, documentation)

    assert len(merged) == 1
    widget = next(iter(merged))
    assert str(widget.identifier) == "Ns.Widget<T>"
    assert widget.metadata == Metadata(summary="A widget.")
    assert widget.type_parameters == (TypeParameterDoc("T", "Element type."),)
    build = widget.methods["Build(T1[], T1)"]
    assert build.metadata == Metadata(summary="Builds.")
    assert [(p.name, p.description) for p in build.parameters] == [
        ("items", "The items."),
        ("result", None),
    ]
    assert build.parameters[1].kind == ParameterKind.OUT


def test_documented_member_without_structure_is_kept() -> None:
    """Verify that an unmatched documented member is inserted into its type."""
    documentation = build_documentation_collection(
        [DocumentationRecord("M:Ns.Widget.Extra", summary="Documented only.")]
    )
    merged = merge_collections(widget_structure(), documentation)
    widget = merged.lookup(parse_identifier("Ns.Widget"))
    assert sorted(widget.methods) == ["Extra()", FIND_KEY]


def test_merge_logs_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Verify the INFO summary of a merge."""
    documentation = build_documentation_collection(
        [
            DocumentationRecord("T:Ns.Zeta", summary="Only documented."),
            DocumentationRecord("M:Ns.Widget.Extra", summary="Documented only."),
        ]
    )
    with caplog.at_level(logging.INFO, logger="docrecon.merge"):
        merge_collections(widget_structure(), documentation)
    assert (
        "Merged 2 types: 1 matched, 0 structural only, 1 documentation only, "
        "1 documented members without structural match"
    ) in caplog.text


def test_type_exceptions_come_from_documentation() -> None:
    """Verify that documented type exceptions survive the merge."""
    documentation = build_documentation_collection(
        [
            DocumentationRecord(
                "T:Ns.Widget", exceptions=(("System.NotSupportedException", None),)
            )
        ]
    )
    merged = merge_collections(widget_structure(), documentation)
    widget = merged.lookup(parse_identifier("Ns.Widget"))
    assert [str(e.cref) for e in widget.exceptions] == ["System.NotSupportedException"]
    assert NameFlags.PUBLIC in widget.identifier.flags
