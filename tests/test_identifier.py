"""Tests for identifier rendering, equality and helpers."""

from docrecon.class_segment import ClassSegment
from docrecon.identifier import Identifier
from docrecon.name_flags import NameFlags
from docrecon.name_parser import parse_identifier
from docrecon.parameter import Parameter
from docrecon.populated_type import PopulatedType


def find_method() -> Identifier:
    """Build ``public static Ns.Widget.Find(System.Int32 a)``."""
    return Identifier(
        (ClassSegment("Ns"), ClassSegment("Widget")),
        "Find",
        (),
        (Parameter(PopulatedType.simple("System", "Int32"), "a"),),
        NameFlags.PUBLIC | NameFlags.STATIC | NameFlags.METHOD,
    )


def test_stringify_variants() -> None:
    """Verify rendering with and without classes, modifiers and parameters."""
    identifier = find_method()
    assert str(identifier) == "Ns.Widget.Find(System.Int32 a)"
    assert (
        identifier.stringify(include_modifiers=True)
        == "public static Ns.Widget.Find(System.Int32 a)"
    )
    assert identifier.stringify(include_classes=False) == "Find(System.Int32 a)"
    assert identifier.stringify(include_method_parameters=False) == "Ns.Widget.Find"
    assert identifier.name_with_parameters == "Find(System.Int32 a)"


def test_modifier_order() -> None:
    """Verify the fixed modifier order of the rendering."""
    identifier = Identifier(
        name="X",
        flags=NameFlags.READONLY | NameFlags.STATIC | NameFlags.PRIVATE,
    )
    assert identifier.stringify(include_modifiers=True) == "private static readonly X"


def test_parent_and_container() -> None:
    """Verify navigation to the enclosing type."""
    identifier = find_method()
    assert str(identifier.parent) == "Ns.Widget"
    assert identifier.container == "Ns.Widget"
    top = Identifier(name="Ns")
    assert top.parent is None
    assert top.container == ""


def test_parent_keeps_generic_parameters() -> None:
    """Verify that the parent of a member of a generic type is generic."""
    identifier = parse_identifier("Ns.Widget`1.Build", is_method=True)
    assert str(identifier.parent) == "Ns.Widget<T1>"


def test_clr_names() -> None:
    """Verify arity suffixes for types and methods."""
    assert Identifier(name="List", type_parameters=("T",)).clr_name == "List`1"
    method = Identifier(name="Map", type_parameters=("T",), flags=NameFlags.METHOD)
    assert method.clr_name == "Map``1"
    assert ClassSegment("Pair", ("A", "B")).clr_name == "Pair`2"
    assert Identifier(name="Plain").clr_name == "Plain"


def test_as_class_path_builds_children() -> None:
    """Verify that a type identifier can become the path of its members."""
    widget = parse_identifier("Ns.Widget`1")
    child = Identifier(widget.as_class_path(), "Build")
    assert str(child) == "Ns.Widget<T1>.Build"
    assert child.parent == widget


def test_equality_is_by_rendering() -> None:
    """Verify that flags outside the rendering do not affect equality."""
    a = parse_identifier("Ns.C.M(System.Int32)", is_method=True)
    b = a.with_flags(a.flags | NameFlags.PUBLIC)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_unsized_and_rank_one_arrays_are_equal() -> None:
    """Verify that [] and [0:] denote the same parameter type."""
    a = parse_identifier("Ns.C.M(System.Int32[])", is_method=True)
    b = parse_identifier("Ns.C.M(System.Int32[0:])", is_method=True)
    assert a == b


def test_ordering_is_lexicographic() -> None:
    """Verify sorting by rendering."""
    names = ["Ns.B", "Ns.A.Z", "Ns.A"]
    ordered = sorted(parse_identifier(n) for n in names)
    assert [str(i) for i in ordered] == ["Ns.A", "Ns.A.Z", "Ns.B"]


def test_replace_type_parameter_names() -> None:
    """Verify renaming of declared and referenced generic names."""
    identifier = parse_identifier("Ns.Map`2.Get(`1)", is_method=True)
    names = {"T1": "TKey", "T2": "TValue"}
    renamed = identifier.replace_type_parameter_names(lambda n: names.get(n, n))
    assert str(renamed) == "Ns.Map<TKey, TValue>.Get(TValue)"
    assert renamed.all_type_parameter_names() == ["TKey", "TValue"]


def test_with_helpers_return_new_values() -> None:
    """Verify that copy constructors leave the original unchanged."""
    identifier = find_method()
    renamed = identifier.with_name("Lookup")
    assert str(renamed) == "Ns.Widget.Lookup(System.Int32 a)"
    assert str(identifier) == "Ns.Widget.Find(System.Int32 a)"
    assert str(identifier.with_parameters([])) == "Ns.Widget.Find()"
