"""Type entity: a type's own documentation plus its member maps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from docrecon.doc_parts import (
    ExceptionDoc,
    TypeParameterDoc,
    merge_type_parameter_docs,
)
from docrecon.errors import DuplicateIdentityError
from docrecon.member_entities import (
    EventEntity,
    FieldEntity,
    MemberEntity,
    MethodEntity,
    PropertyEntity,
)

if TYPE_CHECKING:
    from docrecon.identifier import Identifier
    from docrecon.merge import MergeContext
    from docrecon.metadata import Metadata

MemberT = TypeVar("MemberT", bound=MemberEntity)

MEMBER_MAPS = ("methods", "fields", "properties", "events")


def _frozen_map(items: Mapping[str, MemberT] | None) -> Mapping[str, MemberT]:
    return MappingProxyType(dict(items or {}))


def _with_member(
    members: Mapping[str, MemberT], member: MemberT
) -> Mapping[str, MemberT]:
    key = member.signature_key
    if key in members:
        raise DuplicateIdentityError(str(member.identifier))
    return MappingProxyType({**members, key: member})


@dataclass(frozen=True)
class TypeEntity:
    """A class, struct, interface, enum or delegate."""

    identifier: Identifier
    metadata: Metadata | None = None
    exceptions: tuple[ExceptionDoc, ...] = ()
    type_parameters: tuple[TypeParameterDoc, ...] = ()
    methods: Mapping[str, MethodEntity] = field(default_factory=dict)
    fields: Mapping[str, FieldEntity] = field(default_factory=dict)
    properties: Mapping[str, PropertyEntity] = field(default_factory=dict)
    events: Mapping[str, EventEntity] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze every collection argument."""
        object.__setattr__(self, "exceptions", tuple(self.exceptions))
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))
        for name in MEMBER_MAPS:
            object.__setattr__(self, name, _frozen_map(getattr(self, name)))

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __str__(self) -> str:
        return str(self.identifier)

    @property
    def member_count(self) -> int:
        """Total number of members across the four maps."""
        return sum(len(getattr(self, name)) for name in MEMBER_MAPS)

    def iter_members(self) -> Iterable[MemberEntity]:
        """Yield every member, grouped by map and sorted by signature key."""
        for name in MEMBER_MAPS:
            members: Mapping[str, MemberEntity] = getattr(self, name)
            for key in sorted(members):
                yield members[key]

    # -----------------------------
    # Copy constructors
    # -----------------------------

    def with_metadata(self, metadata: Metadata | None) -> TypeEntity:
        return replace(self, metadata=metadata)

    def with_exceptions(self, exceptions: Iterable[ExceptionDoc]) -> TypeEntity:
        return replace(self, exceptions=tuple(exceptions))

    def with_type_parameters(
        self, type_parameters: Iterable[TypeParameterDoc]
    ) -> TypeEntity:
        return replace(self, type_parameters=tuple(type_parameters))

    def add_method(self, method: MethodEntity) -> TypeEntity:
        return replace(self, methods=_with_member(self.methods, method))

    def add_field(self, field_: FieldEntity) -> TypeEntity:
        return replace(self, fields=_with_member(self.fields, field_))

    def add_property(self, property_: PropertyEntity) -> TypeEntity:
        return replace(self, properties=_with_member(self.properties, property_))

    def add_event(self, event: EventEntity) -> TypeEntity:
        return replace(self, events=_with_member(self.events, event))

    def add_member(self, member: MemberEntity) -> TypeEntity:
        """Add a member to the map matching its entity class."""
        if isinstance(member, MethodEntity):
            return self.add_method(member)
        if isinstance(member, PropertyEntity):
            return self.add_property(member)
        if isinstance(member, EventEntity):
            return self.add_event(member)
        if isinstance(member, FieldEntity):
            return self.add_field(member)
        msg = f"Not a member entity: {type(member).__name__}"
        raise TypeError(msg)

    # -----------------------------
    # Merging
    # -----------------------------

    def merge_documentation(
        self, documented: TypeEntity, context: MergeContext | None = None
    ) -> TypeEntity:
        """Combine this structural type with its documented counterpart."""
        result = self
        if documented.metadata is not None:
            result = result.with_metadata(documented.metadata)
        if documented.exceptions:
            result = result.with_exceptions(documented.exceptions)

        if documented.type_parameters:
            result = result.with_type_parameters(
                merge_type_parameter_docs(
                    self.type_parameters, documented.type_parameters
                )
            )

        changes = {}
        for name in MEMBER_MAPS:
            documented_members = getattr(documented, name)
            if documented_members:
                changes[name] = _merge_members(
                    getattr(self, name), documented_members, context
                )
        return replace(result, **changes) if changes else result


def _merge_members(
    structural: Mapping[str, MemberT],
    documented: Mapping[str, MemberT],
    context: MergeContext | None,
) -> Mapping[str, MemberT]:
    """Merge matching members; insert documented ones with no match."""
    result = dict(structural)
    for key in sorted(documented):
        doc_member = documented[key]
        existing = result.get(key)
        if existing is None:
            result[key] = doc_member
            if context is not None:
                context.note_unmatched_member(doc_member)
        else:
            result[key] = existing.merge_documentation(doc_member)
    return MappingProxyType(result)
