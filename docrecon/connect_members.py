"""Attach loose members to their owning types."""

import logging
from collections.abc import Iterable

from docrecon.canonicalize import canonicalize
from docrecon.member_entities import MemberEntity
from docrecon.type_collection import TypeCollection
from docrecon.type_entity import TypeEntity

logger = logging.getLogger(__name__)


def connect_members(
    types: Iterable[TypeEntity], members: Iterable[MemberEntity]
) -> TypeCollection:
    """Build a collection from types and the members that belong to them.

    A member whose owning type was never listed gets an empty TypeEntity
    created for it. Duplicate types or member signatures raise
    ``DuplicateIdentityError``.
    """
    table = dict(TypeCollection().add_types(types).types)

    for member in members:
        parent = member.identifier.parent
        if parent is None:
            msg = f"Member has no containing type: {member.identifier}"
            raise ValueError(msg)
        key = canonicalize(parent)
        owner = table.get(key)
        if owner is None:
            logger.debug("Creating implicit type %s for member %s", parent, member)
            owner = TypeEntity(parent)
        table[key] = owner.add_member(member)

    return TypeCollection(table.values())
