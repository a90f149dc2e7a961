"""Plain-data export of a merged collection for renderers."""

import json
from dataclasses import asdict
from enum import IntFlag
from pathlib import Path
from typing import Any

import yaml

from docrecon.doc_parts import ExceptionDoc
from docrecon.member_entities import (
    EventEntity,
    MemberEntity,
    MethodEntity,
    PropertyEntity,
)
from docrecon.metadata import Metadata
from docrecon.type_collection import TypeCollection
from docrecon.type_entity import MEMBER_MAPS, TypeEntity


def flag_names(flags: IntFlag) -> list[str]:
    """Return lower-case names of the single bits set in ``flags``."""
    return [
        f.name.lower()
        for f in type(flags)
        if f.name and f.value & (f.value - 1) == 0 and f in flags
    ]


def _metadata(metadata: Metadata | None) -> dict[str, str]:
    if metadata is None:
        return {}
    return {k: v for k, v in asdict(metadata).items() if v is not None}


def _exceptions(exceptions: tuple[ExceptionDoc, ...]) -> list[dict[str, Any]]:
    return [{"cref": str(e.cref), "description": e.description} for e in exceptions]


def member_to_dict(member: MemberEntity) -> dict[str, Any]:
    """Describe one member as plain data."""
    data: dict[str, Any] = {
        "id": str(member.identifier),
        "name": member.identifier.display_name,
        "flags": flag_names(member.identifier.flags),
        "metadata": _metadata(member.metadata),
    }
    if member.exceptions:
        data["exceptions"] = _exceptions(member.exceptions)

    if isinstance(member, MethodEntity):
        data["name"] = member.short_name
        data["type_parameters"] = [
            {"name": t.name, "description": t.description}
            for t in member.type_parameters
        ]
        data["parameters"] = [
            {
                "name": p.name,
                "type": str(p.parameter_type) if p.parameter_type else None,
                "kind": flag_names(p.kind),
                "description": p.description,
            }
            for p in member.parameters
        ]
    elif isinstance(member, PropertyEntity):
        data["getter"] = flag_names(member.getter_flags)
        data["setter"] = flag_names(member.setter_flags)
    elif isinstance(member, EventEntity):
        data["adder"] = flag_names(member.adder_flags)
        data["remover"] = flag_names(member.remover_flags)
    return data


def type_to_dict(type_: TypeEntity) -> dict[str, Any]:
    """Describe one type and its members as plain data."""
    data: dict[str, Any] = {
        "id": str(type_.identifier),
        "name": type_.identifier.display_name,
        "container": type_.identifier.container,
        "flags": flag_names(type_.identifier.flags),
        "metadata": _metadata(type_.metadata),
        "type_parameters": [
            {"name": t.name, "description": t.description}
            for t in type_.type_parameters
        ],
    }
    if type_.exceptions:
        data["exceptions"] = _exceptions(type_.exceptions)
    for name in MEMBER_MAPS:
        members = getattr(type_, name)
        data[name] = [member_to_dict(members[key]) for key in sorted(members)]
    return data


def collection_to_dict(collection: TypeCollection) -> dict[str, Any]:
    """Describe a whole collection, types in canonical order."""
    return {"types": [type_to_dict(t) for t in collection]}


def dump_collection(collection: TypeCollection, path: Path) -> None:
    """Write the collection as JSON (``.json``) or YAML (anything else)."""
    data = collection_to_dict(collection)
    if path.suffix.lower() == ".json":
        text = json.dumps(data, indent=2)
    else:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
