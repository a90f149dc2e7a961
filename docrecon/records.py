"""Producer records: what structural and documentation producers hand us.

Both record kinds can be built directly or from the plain dicts found in a
YAML record file (``from_dict``).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from docrecon.as_text import as_text
from docrecon.name_flags import (
    NameFlags,
    ParameterKind,
    flags_from_names,
    kind_from_names,
)

ACCESSOR_KEYS = (("getter", "setter"), ("adder", "remover"))


def _pairs(raw: object) -> tuple[tuple[str, str | None], ...]:
    """Normalize ``{name: text}`` or ``[[name, text], ...]`` to a tuple of pairs."""
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        items: Iterable[Any] = raw.items()
    elif isinstance(raw, list):
        items = raw
    else:
        msg = f"Expected a mapping or a list of pairs, got {type(raw).__name__}"
        raise TypeError(msg)

    pairs = []
    for item in items:
        if isinstance(item, Mapping):
            name, text = item["name"], item.get("description")
        else:
            name, text = item
        pairs.append((str(name), as_text(text)))
    return tuple(pairs)


def _require(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if not value:
        msg = f"Record is missing required key '{key}'"
        raise ValueError(msg)
    return str(value)


@dataclass(frozen=True)
class ParameterShape:
    """One structural parameter: type text, name and passing kind."""

    type: str
    name: str | None = None
    kind: ParameterKind = ParameterKind(0)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ParameterShape":
        return cls(
            _require(raw, "type"),
            raw.get("name"),
            kind_from_names(raw.get("kind")),
        )


@dataclass(frozen=True)
class StructuralRecord:
    """A type or member as enumerated from compiled code.

    ``generic_names`` lists the real generic parameter names for every
    declaration in ``identifier``, outermost type first, member last.
    ``accessor_flags`` holds getter/setter flags for properties and
    adder/remover flags for events.
    """

    kind: str
    identifier: str
    generic_names: tuple[str, ...] = ()
    flags: NameFlags = NameFlags(0)
    parameters: tuple[ParameterShape, ...] = ()
    accessor_flags: tuple[NameFlags, NameFlags] = (NameFlags(0), NameFlags(0))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "StructuralRecord":
        accessors = raw.get("accessor_flags") or {}
        accessor_flags = (NameFlags(0), NameFlags(0))
        for first, second in ACCESSOR_KEYS:
            if first in accessors or second in accessors:
                accessor_flags = (
                    flags_from_names(accessors.get(first)),
                    flags_from_names(accessors.get(second)),
                )
        return cls(
            kind=_require(raw, "kind"),
            identifier=_require(raw, "identifier"),
            generic_names=tuple(str(n) for n in raw.get("generic_names") or ()),
            flags=flags_from_names(raw.get("flags")),
            parameters=tuple(
                ParameterShape.from_dict(p) for p in raw.get("parameters") or ()
            ),
            accessor_flags=accessor_flags,
        )


@dataclass(frozen=True)
class DocumentationRecord:
    """Free text attached to one prefixed member id such as ``M:Ns.T.F``."""

    identifier: str
    summary: str | None = None
    remarks: str | None = None
    example: str | None = None
    see: str | None = None
    see_also: str | None = None
    parameters: tuple[tuple[str, str | None], ...] = ()
    type_parameters: tuple[tuple[str, str | None], ...] = ()
    exceptions: tuple[tuple[str, str | None], ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DocumentationRecord":
        return cls(
            identifier=_require(raw, "identifier"),
            summary=as_text(raw.get("summary")),
            remarks=as_text(raw.get("remarks")),
            example=as_text(raw.get("example")),
            see=as_text(raw.get("see")),
            see_also=as_text(raw.get("see_also")),
            parameters=_pairs(raw.get("parameters")),
            type_parameters=_pairs(raw.get("type_parameters")),
            exceptions=_pairs(raw.get("exceptions")),
        )


@dataclass
class Source:
    """Both halves describing one body of code, e.g. one assembly."""

    name: str
    structural: list[StructuralRecord] = field(default_factory=list)
    documentation: list[DocumentationRecord] = field(default_factory=list)
