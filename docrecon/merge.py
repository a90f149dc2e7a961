"""Reconciliation of a structural collection with a documentation collection."""

import logging
from dataclasses import dataclass, field

from docrecon.canonicalize import canonicalize
from docrecon.identifier import Identifier
from docrecon.member_entities import MemberEntity
from docrecon.type_collection import TypeCollection
from docrecon.type_entity import TypeEntity

logger = logging.getLogger(__name__)


@dataclass
class MergeContext:
    """State for one merge_collections call: what matched and what was left over."""

    documentation: TypeCollection
    applied: set[Identifier] = field(default_factory=set)
    matched: int = 0
    passed_through: int = 0
    documentation_only: int = 0
    unmatched_members: int = 0

    def claim(self, identifier: Identifier) -> TypeEntity | None:
        """Return the documented type for ``identifier`` and mark it applied."""
        key = canonicalize(identifier)
        documented = self.documentation.types.get(key)
        if documented is not None:
            self.applied.add(key)
        return documented

    def leftovers(self) -> list[TypeEntity]:
        """Return documented types no structural type claimed, in canonical order."""
        return [
            self.documentation.types[key]
            for key in self.documentation.keys()
            if key not in self.applied
        ]

    def note_unmatched_member(self, member: MemberEntity) -> None:
        """Record a documented member that had no structural counterpart."""
        self.unmatched_members += 1
        logger.debug("Documented member without structural match: %s", member)


def merge_collections(
    structural: TypeCollection, documentation: TypeCollection
) -> TypeCollection:
    """Merge documentation into structure.

    Documentation text wins, structural signatures win. Structural types with
    no documented counterpart pass through unchanged; documented types with no
    structural counterpart are inserted unchanged afterwards.
    """
    context = MergeContext(documentation)
    merged: list[TypeEntity] = []

    for structural_type in structural:
        documented = context.claim(structural_type.identifier)
        if documented is None:
            context.passed_through += 1
            merged.append(structural_type)
            continue
        context.matched += 1
        merged.append(structural_type.merge_documentation(documented, context))

    leftovers = context.leftovers()
    context.documentation_only = len(leftovers)
    merged.extend(leftovers)

    logger.info(
        "Merged %d types: %d matched, %d structural only, %d documentation only, "
        "%d documented members without structural match",
        len(merged),
        context.matched,
        context.passed_through,
        context.documentation_only,
        context.unmatched_members,
    )
    return TypeCollection(merged)
