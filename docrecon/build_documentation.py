"""Build a TypeCollection from documentation records."""

import logging
from collections.abc import Iterable

from docrecon.connect_members import connect_members
from docrecon.doc_parts import ExceptionDoc, ParameterDoc, TypeParameterDoc
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
from docrecon.metadata import Metadata
from docrecon.name_parser import parse_identifier, parse_member_id
from docrecon.records import DocumentationRecord
from docrecon.type_collection import TypeCollection
from docrecon.type_entity import TypeEntity

logger = logging.getLogger(__name__)

TYPE_PREFIX = "T:"
PREFIX_SEPARATOR = ":"
PREFIX_LENGTH = len(TYPE_PREFIX)


def exception_identifier(cref: str) -> Identifier:
    """Parse an exception cref; the ``T:`` prefix is optional."""
    cref = cref.strip()
    if cref.startswith(TYPE_PREFIX):
        cref = cref[PREFIX_LENGTH:]
    return parse_identifier(cref)


def is_type_cref(cref: str) -> bool:
    """Whether ``cref`` names a type: ``T:`` prefixed or unprefixed."""
    cref = cref.strip()
    if cref[PREFIX_LENGTH - 1 : PREFIX_LENGTH] != PREFIX_SEPARATOR:
        return True
    return cref.startswith(TYPE_PREFIX)


def record_exceptions(record: DocumentationRecord) -> tuple[ExceptionDoc, ...]:
    """Parse the exception crefs of a record, skipping non-type references.

    Unresolved references (``!:``) and member crefs cannot name an exception
    type; they are logged and left out.
    """
    exceptions = []
    for cref, text in record.exceptions:
        if not is_type_cref(cref):
            logger.warning(
                "%s: skipping exception reference %s, not a type",
                record.identifier,
                cref,
            )
            continue
        exceptions.append(ExceptionDoc(exception_identifier(cref), text))
    return tuple(exceptions)


def record_metadata(record: DocumentationRecord) -> Metadata | None:
    """Collect the free-text fields, or None when all are empty."""
    metadata = Metadata(
        record.summary, record.remarks, record.example, record.see, record.see_also
    )
    return None if metadata.is_empty else metadata


def documentation_entity(record: DocumentationRecord) -> TypeEntity | MemberEntity:
    """Turn one documentation record into a type or member entity."""
    kind, identifier = parse_member_id(record.identifier)
    metadata = record_metadata(record)
    type_parameters = tuple(
        TypeParameterDoc(name, text) for name, text in record.type_parameters
    )

    exceptions = record_exceptions(record)
    if kind is MemberKind.TYPE:
        return TypeEntity(identifier, metadata, exceptions, type_parameters)
    if kind is MemberKind.METHOD:
        parameters = tuple(
            ParameterDoc(name, description=text) for name, text in record.parameters
        )
        return MethodEntity(
            identifier, metadata, exceptions, type_parameters, parameters
        )
    if kind is MemberKind.PROPERTY:
        return PropertyEntity(identifier, metadata, exceptions)
    if kind is MemberKind.EVENT:
        return EventEntity(identifier, metadata, exceptions)
    return FieldEntity(identifier, metadata, exceptions)


def build_documentation_collection(
    records: Iterable[DocumentationRecord], *, source: str = "documentation"
) -> TypeCollection:
    """Build the documentation side of one source.

    Members are attached to their documented type, or to an empty type
    created on the fly when the type itself carries no documentation.
    """
    types: list[TypeEntity] = []
    members: list[MemberEntity] = []

    for record in records:
        try:
            entity = documentation_entity(record)
        except (DocReconError, ValueError) as e:
            raise SourceLoadError(source, record.identifier, str(e)) from e
        if isinstance(entity, TypeEntity):
            types.append(entity)
        else:
            members.append(entity)

    logger.debug(
        "%s: %d documented types, %d documented members",
        source,
        len(types),
        len(members),
    )
    try:
        return connect_members(types, members)
    except (DocReconError, ValueError) as e:
        raise SourceLoadError(source, None, str(e)) from e
