"""Member entities: methods, fields, properties and events.

Every entity is a frozen value. ``with_*`` and ``add_*`` return new values,
and ``merge_documentation`` combines a structural entity (``self``) with its
documented counterpart: documentation text wins, the structural signature wins.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TypeVar

from docrecon.canonicalize import canonicalize
from docrecon.doc_parts import (
    ExceptionDoc,
    ParameterDoc,
    TypeParameterDoc,
    merge_parameter_docs,
    merge_type_parameter_docs,
)
from docrecon.identifier import Identifier
from docrecon.metadata import Metadata
from docrecon.name_flags import NameFlags

MemberT = TypeVar("MemberT", bound="MemberEntity")


@dataclass(frozen=True)
class MemberEntity:
    """Fields shared by every member kind."""

    identifier: Identifier
    metadata: Metadata | None = None
    exceptions: tuple[ExceptionDoc, ...] = ()

    def __post_init__(self) -> None:
        """Freeze list arguments."""
        object.__setattr__(self, "exceptions", tuple(self.exceptions))

    @property
    def signature_key(self) -> str:
        """Key of this member inside its owning type's child map."""
        return canonicalize(self.identifier).signature

    def with_metadata(self: MemberT, metadata: Metadata | None) -> MemberT:
        return replace(self, metadata=metadata)

    def with_exceptions(self: MemberT, exceptions: Iterable[ExceptionDoc]) -> MemberT:
        return replace(self, exceptions=tuple(exceptions))

    def merge_documentation(self: MemberT, documented: MemberT) -> MemberT:
        """Take metadata and exceptions from ``documented`` when it has them."""
        result = self
        if documented.metadata is not None:
            result = result.with_metadata(documented.metadata)
        if documented.exceptions:
            result = result.with_exceptions(documented.exceptions)
        return result

    def __str__(self) -> str:
        return str(self.identifier)


@dataclass(frozen=True)
class FieldEntity(MemberEntity):
    """A field or constant."""


@dataclass(frozen=True)
class PropertyEntity(MemberEntity):
    """A property, with the flags of its accessors."""

    getter_flags: NameFlags = NameFlags(0)
    setter_flags: NameFlags = NameFlags(0)


@dataclass(frozen=True)
class EventEntity(MemberEntity):
    """An event, with the flags of its accessors."""

    adder_flags: NameFlags = NameFlags(0)
    remover_flags: NameFlags = NameFlags(0)


@dataclass(frozen=True)
class MethodEntity(MemberEntity):
    """A method or constructor with its parameter and type-parameter docs."""

    type_parameters: tuple[TypeParameterDoc, ...] = ()
    parameters: tuple[ParameterDoc, ...] = ()

    def __post_init__(self) -> None:
        """Freeze list arguments."""
        super().__post_init__()
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))
        object.__setattr__(self, "parameters", tuple(self.parameters))

    @property
    def short_name(self) -> str:
        """Render ``Name<T>(a, b)``, suffixed with `` [static]`` when static."""
        text = self.identifier.display_name
        if self.type_parameters:
            text += "<" + ", ".join(t.name for t in self.type_parameters) + ">"
        text += "(" + ", ".join(p.name for p in self.parameters) + ")"
        if self.identifier.flags & NameFlags.STATIC:
            text += " [static]"
        return text

    def with_parameters(self, parameters: Iterable[ParameterDoc]) -> "MethodEntity":
        return replace(self, parameters=tuple(parameters))

    def with_type_parameters(
        self, type_parameters: Iterable[TypeParameterDoc]
    ) -> "MethodEntity":
        return replace(self, type_parameters=tuple(type_parameters))

    def merge_documentation(self, documented: "MethodEntity") -> "MethodEntity":
        """Also fold in parameter and type-parameter descriptions by name."""
        result = super().merge_documentation(documented)
        return result.with_parameters(
            merge_parameter_docs(self.parameters, documented.parameters)
        ).with_type_parameters(
            merge_type_parameter_docs(self.type_parameters, documented.type_parameters)
        )
