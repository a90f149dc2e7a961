"""Small documentation records shared by several entity kinds."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import TypeVar

from docrecon.identifier import Identifier
from docrecon.name_flags import ParameterKind
from docrecon.populated_type import PopulatedType


@dataclass(frozen=True)
class TypeParameterDoc:
    """A generic parameter name and its description."""

    name: str
    description: str | None = None

    def with_description(self, description: str | None) -> "TypeParameterDoc":
        return replace(self, description=description)


@dataclass(frozen=True)
class ParameterDoc:
    """A method parameter: name, type, passing kind and description."""

    name: str
    parameter_type: PopulatedType | None = None
    kind: ParameterKind = ParameterKind(0)
    description: str | None = None

    def with_description(self, description: str | None) -> "ParameterDoc":
        return replace(self, description=description)

    def __str__(self) -> str:
        if self.parameter_type is None:
            return self.name
        return f"{self.parameter_type} {self.name}"


@dataclass(frozen=True)
class ExceptionDoc:
    """An exception a member may raise, by type identifier."""

    cref: Identifier
    description: str | None = None

    def __str__(self) -> str:
        return str(self.cref)


NamedT = TypeVar("NamedT", TypeParameterDoc, ParameterDoc)


def merge_by_name(
    structural: Iterable[NamedT],
    documented: Iterable[NamedT],
    combine: Callable[[NamedT, NamedT], NamedT],
) -> tuple[NamedT, ...]:
    """Merge two name-keyed lists.

    Structural order is preserved; a documented entry whose name matches is
    folded in with ``combine(structural_entry, documented_entry)``; the rest
    are appended in documentation order.
    """
    result = list(structural)
    index = {item.name: i for i, item in enumerate(result)}
    for doc in documented:
        i = index.get(doc.name)
        if i is None:
            result.append(doc)
        else:
            result[i] = combine(result[i], doc)
    return tuple(result)


def merge_type_parameter_docs(
    structural: Iterable[TypeParameterDoc], documented: Iterable[TypeParameterDoc]
) -> tuple[TypeParameterDoc, ...]:
    """Merge type-parameter docs by name; a documented entry replaces its match."""
    return merge_by_name(structural, documented, lambda _s, d: d)


def merge_parameter_docs(
    structural: Iterable[ParameterDoc], documented: Iterable[ParameterDoc]
) -> tuple[ParameterDoc, ...]:
    """Merge parameter docs by name, never by position.

    A match keeps the structural name, type and kind and takes the documented
    description. Unmatched documented parameters are appended.
    """
    return merge_by_name(
        structural, documented, lambda s, d: s.with_description(d.description)
    )
