"""Build a TypeCollection from structural records."""

import logging
from collections.abc import Iterable

from docrecon.connect_members import connect_members
from docrecon.doc_parts import ParameterDoc, TypeParameterDoc
from docrecon.errors import DocReconError, SourceLoadError
from docrecon.identifier import Identifier
from docrecon.member_entities import (
    EventEntity,
    FieldEntity,
    MemberEntity,
    MethodEntity,
    PropertyEntity,
)
from docrecon.member_kind import MemberKind
from docrecon.name_flags import NameFlags
from docrecon.name_parser import parse_identifier, parse_type
from docrecon.parameter import Parameter
from docrecon.records import StructuralRecord
from docrecon.type_collection import TypeCollection
from docrecon.type_entity import TypeEntity

logger = logging.getLogger(__name__)

COMPILER_GENERATED_PREFIXES = ("<",)


def is_compiler_generated(
    record: StructuralRecord, prefixes: Iterable[str] = COMPILER_GENERATED_PREFIXES
) -> bool:
    """Whether any dotted part of the record's name is compiler generated."""
    prefixes = tuple(prefixes)
    return any(part.startswith(prefixes) for part in record.identifier.split("."))


def structural_identifier(record: StructuralRecord) -> Identifier:
    """Parse a record's identifier, apply real generic names and parameters."""
    kind = MemberKind.from_label(record.kind)
    identifier = parse_identifier(
        record.identifier, is_method=kind is MemberKind.METHOD
    )
    identifier = identifier.with_flags(identifier.flags | record.flags)

    if record.generic_names:
        synthetic = identifier.all_type_parameter_names()
        if len(synthetic) != len(record.generic_names):
            msg = (
                f"{len(record.generic_names)} generic names given for "
                f"{len(synthetic)} declared generic parameters"
            )
            raise ValueError(msg)
        names = dict(zip(synthetic, record.generic_names, strict=True))
        identifier = identifier.replace_type_parameter_names(
            lambda n: names.get(n, n)
        )

    if not record.parameters:
        return identifier

    type_level = [t for c in identifier.class_path for t in c.type_parameters]
    method_level = list(identifier.type_parameters)
    parameters = tuple(
        Parameter(parse_type(p.type, type_level, method_level), p.name, p.kind)
        for p in record.parameters
    )
    return identifier.with_parameters(parameters)


def structural_entity(record: StructuralRecord) -> TypeEntity | MemberEntity:
    """Turn one structural record into a type or member entity."""
    kind = MemberKind.from_label(record.kind)
    identifier = structural_identifier(record)
    type_parameters = tuple(TypeParameterDoc(t) for t in identifier.type_parameters)

    if kind is MemberKind.TYPE:
        return TypeEntity(identifier, type_parameters=type_parameters)
    if kind is MemberKind.METHOD:
        parameters = tuple(
            ParameterDoc(p.name or "", p.type, p.kind) for p in identifier.parameters
        )
        return MethodEntity(
            identifier, type_parameters=type_parameters, parameters=parameters
        )

    first, second = record.accessor_flags
    if kind is MemberKind.PROPERTY:
        return PropertyEntity(identifier, getter_flags=first, setter_flags=second)
    if kind is MemberKind.EVENT:
        return EventEntity(identifier, adder_flags=first, remover_flags=second)
    return FieldEntity(identifier)


def build_structural_collection(
    records: Iterable[StructuralRecord],
    include: NameFlags = NameFlags.ALL_VISIBILITIES,
    *,
    skip_compiler_generated: bool = True,
    compiler_generated_prefixes: Iterable[str] = COMPILER_GENERATED_PREFIXES,
    source: str = "structural",
) -> TypeCollection:
    """Build the structural side of one source.

    Only types and members whose visibility intersects ``include`` are kept.
    The first failing record aborts the whole source with ``SourceLoadError``.
    """
    types: list[TypeEntity] = []
    members: list[MemberEntity] = []
    prefixes = tuple(compiler_generated_prefixes)
    skipped = 0

    for record in records:
        if skip_compiler_generated and is_compiler_generated(record, prefixes):
            skipped += 1
            continue
        try:
            entity = structural_entity(record)
        except (DocReconError, ValueError) as e:
            raise SourceLoadError(source, record.identifier, str(e)) from e
        if isinstance(entity, TypeEntity):
            types.append(entity)
        else:
            members.append(entity)

    if skipped:
        logger.debug("%s: skipped %d compiler-generated records", source, skipped)

    try:
        collection = connect_members(types, members)
    except (DocReconError, ValueError) as e:
        raise SourceLoadError(source, None, str(e)) from e
    return collection.filter_visibility(include)
