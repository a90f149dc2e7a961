"""Tests for the member-id parser."""

import pytest

from docrecon.array_info import ArrayInfo
from docrecon.errors import BackReferenceError, NameLexError, NameParseError
from docrecon.member_kind import MemberKind
from docrecon.name_flags import NameFlags, ParameterKind
from docrecon.name_parser import parse_identifier, parse_member_id, parse_type


def test_generic_method_with_arrays_and_out() -> None:
    """Verify back-references, a rank-1 array and an out parameter."""
    identifier = parse_identifier("Widget`1.Build(`0[0:],`0@)", is_method=True)

    assert identifier.name == "Build"
    assert [str(c) for c in identifier.class_path] == ["Widget<T1>"]
    first, second = identifier.parameters
    assert str(first.type) == "T1[]"
    assert first.type.arrays == (ArrayInfo(1),)
    assert str(second.type) == "T1"
    assert second.kind == ParameterKind.OUT
    assert str(identifier) == "Widget<T1>.Build(T1[], out T1)"


def test_nested_generic_arguments() -> None:
    """Verify that generic arguments nest to any depth."""
    _, identifier = parse_member_id(
        "M:Ns.C.M(System.Collections.Generic.Dictionary{System.String,"
        "System.Collections.Generic.List{System.Int32}})"
    )
    assert str(identifier.parameters[0]) == (
        "System.Collections.Generic.Dictionary<System.String, "
        "System.Collections.Generic.List<System.Int32>>"
    )


def test_multi_dimensional_and_jagged_arrays() -> None:
    """Verify rank-2 arrays and consecutive array suffixes."""
    _, identifier = parse_member_id("M:Ns.C.M(System.Int32[0:,0:],System.Byte[][])")
    assert [str(p) for p in identifier.parameters] == [
        "System.Int32[,]",
        "System.Byte[][]",
    ]


def test_single_counter_across_type_and_method_parameters() -> None:
    """Verify synthetic names share one ordinal but resolve per list."""
    _, identifier = parse_member_id("M:Ns.C`1.Map``1(``0,`0)")
    assert identifier.type_parameters == ("T2",)
    assert str(identifier) == "Ns.C<T1>.Map<T2>(T2, T1)"


def test_nested_generic_types_number_in_declaration_order() -> None:
    """Verify numbering across several generic path levels."""
    assert str(parse_identifier("Ns.Outer`1.Inner`2")) == "Ns.Outer<T1>.Inner<T2, T3>"


def test_explicit_interface_name_is_not_a_constructor() -> None:
    """Verify that Ctor#ctor is an explicit-interface name."""
    identifier = parse_identifier("Ns.Ctor#ctor")
    assert identifier.name == "Ctor#ctor"
    assert identifier.flags & NameFlags.EXPLICIT_INTERFACE_IMPLEMENTATION
    assert identifier.flags & NameFlags.SPECIAL_NAME
    assert not identifier.flags & NameFlags.CONSTRUCTOR


def test_class_constructor_is_static() -> None:
    """Verify the flags of a ##ctor class constructor."""
    identifier = parse_identifier("Ns.C.##ctor", is_method=True)
    assert identifier.flags & NameFlags.CLASS_CONSTRUCTOR
    assert identifier.flags & NameFlags.STATIC
    assert str(identifier) == "Ns.C.C()"


def test_constructor_renders_class_name() -> None:
    """Verify that #ctor is rendered with the owning class name."""
    _, identifier = parse_member_id("M:Ns.Widget.#ctor(System.Int32)")
    assert identifier.flags & NameFlags.CONSTRUCTOR
    assert identifier.name == "#ctor"
    assert str(identifier) == "Ns.Widget.Widget(System.Int32)"


def test_explicit_interface_implementation_method() -> None:
    """Verify a fully qualified explicit interface member name."""
    _, identifier = parse_member_id("M:Ns.C.System#IDisposable#Dispose")
    assert identifier.name == "System#IDisposable#Dispose"
    assert identifier.flags & NameFlags.EXPLICIT_INTERFACE_IMPLEMENTATION


def test_is_method_adds_method_flag() -> None:
    """Verify that is_method marks the identifier callable."""
    assert not parse_identifier("Ns.C.Run").flags & NameFlags.METHOD
    method = parse_identifier("Ns.C.Run", is_method=True)
    assert method.flags & NameFlags.METHOD
    assert str(method) == "Ns.C.Run()"


def test_member_id_prefixes() -> None:
    """Verify each supported prefix maps to its member kind."""
    expected = {
        "T:Ns.C": MemberKind.TYPE,
        "M:Ns.C.Run": MemberKind.METHOD,
        "F:Ns.C.count": MemberKind.FIELD,
        "P:Ns.C.Item(System.Int32)": MemberKind.PROPERTY,
        "E:Ns.C.Changed": MemberKind.EVENT,
    }
    for text, kind in expected.items():
        assert parse_member_id(text)[0] is kind


def test_indexer_renders_parameters() -> None:
    """Verify that a property with parameters keeps its parameter list."""
    _, identifier = parse_member_id("P:Ns.C.Item(System.Int32)")
    assert str(identifier) == "Ns.C.Item(System.Int32)"


def test_reparse_of_rendering_without_back_references() -> None:
    """Verify that path, parameter types and arrays survive a re-render."""
    text = "Ns.C.Find(System.Int32,System.String[])"
    identifier = parse_identifier(text, is_method=True)
    assert str(identifier) == "Ns.C.Find(System.Int32, System.String[])"
    assert str(identifier.parameters[1].type) == "System.String[]"


def test_trailing_garbage_is_rejected() -> None:
    """Verify that text after a complete identifier is an error."""
    with pytest.raises(NameParseError) as info:
        parse_identifier("Ns.C)")
    assert info.value.expectation == "Unknown garbage at end of name"
    assert info.value.offset == len("Ns.C")


def test_garbage_after_arguments_is_rejected() -> None:
    """Verify that nothing may follow the closing parenthesis."""
    with pytest.raises(NameParseError) as info:
        parse_identifier("M(A)x")
    assert info.value.offset == len("M(A)")


def test_missing_name_reports_offset() -> None:
    """Verify the error for an empty path segment."""
    with pytest.raises(NameParseError) as info:
        parse_identifier("Ns..C")
    assert info.value.expectation == "Missing class or method name"
    assert info.value.offset == len("Ns.")
    assert str(info.value) == "Missing class or method name at character 3"


def test_unclosed_argument_list() -> None:
    """Verify the error for a missing right parenthesis."""
    with pytest.raises(NameParseError) as info:
        parse_identifier("M(A,B")
    assert "right parenthesis" in info.value.expectation
    assert info.value.offset == len("M(A,B")


def test_back_reference_out_of_range() -> None:
    """Verify that a back-reference past the declared list is rejected."""
    with pytest.raises(BackReferenceError) as info:
        parse_identifier("C`1.M(`1)")
    assert isinstance(info.value, IndexError)
    assert isinstance(info.value, NameParseError)
    assert info.value.offset == len("C`1.M(`")


def test_method_back_reference_without_method_generics() -> None:
    """Verify that ``0 needs a member-level declaration."""
    with pytest.raises(BackReferenceError):
        parse_identifier("C`1.M(``0)")


def test_unrecognized_character() -> None:
    """Verify that a lexer error surfaces as NameLexError."""
    with pytest.raises(NameLexError) as info:
        parse_identifier("A<B")
    assert info.value.offset == 1


def test_member_id_offsets_include_prefix() -> None:
    """Verify that offsets count the two prefix characters."""
    with pytest.raises(NameLexError) as info:
        parse_member_id("M:A<B")
    assert info.value.offset == len("M:A")


def test_member_id_offsets_count_leading_whitespace() -> None:
    """Verify that offsets are relative to the text as given."""
    with pytest.raises(NameLexError) as info:
        parse_member_id("  M:A<B")
    assert info.value.offset == len("  M:A")
    with pytest.raises(NameParseError) as info:
        parse_member_id("  Ns.C")
    assert info.value.offset == len("  ")


def test_member_id_ignores_surrounding_whitespace() -> None:
    """Verify that padded ids parse like unpadded ones."""
    assert parse_member_id(" M:Ns.C.Run \n") == parse_member_id("M:Ns.C.Run")


def test_member_id_requires_prefix() -> None:
    """Verify that an unprefixed id is rejected."""
    with pytest.raises(NameParseError) as info:
        parse_member_id("Ns.C")
    assert info.value.offset == 0


def test_namespace_prefix_is_unsupported() -> None:
    """Verify that namespace ids are rejected."""
    with pytest.raises(NameParseError, match="Unsupported"):
        parse_member_id("N:Ns")


def test_parse_type_with_declared_names() -> None:
    """Verify parsing a bare type shape with real and back-referenced names."""
    assert str(parse_type("T[]", ["T"])) == "T[]"
    assert str(parse_type("`0", ["TKey"])) == "TKey"
    assert str(parse_type("``0", [], ["TResult"])) == "TResult"
    assert str(parse_type("System.Func{`0,``0}", ["TIn"], ["TOut"])) == (
        "System.Func<TIn, TOut>"
    )


def test_parse_type_rejects_trailing_text() -> None:
    """Verify that parse_type consumes the whole text."""
    with pytest.raises(NameParseError):
        parse_type("System.Int32)")
