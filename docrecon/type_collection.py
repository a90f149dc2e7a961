"""Read-only collection of type entities keyed by canonical identity."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, NoReturn

from docrecon.canonicalize import canonicalize
from docrecon.errors import DuplicateIdentityError, UnsupportedOperationError
from docrecon.identifier import Identifier
from docrecon.name_flags import NameFlags
from docrecon.type_entity import MEMBER_MAPS, TypeEntity

if TYPE_CHECKING:
    from docrecon.member_entities import MemberEntity


class TypeCollection(Collection):
    """Immutable map from canonical Identifier to TypeEntity.

    Enumeration is always in lexicographic order of the canonical rendering,
    never insertion order. Mutating methods raise ``UnsupportedOperationError``.
    """

    __slots__ = ("_types",)

    def __init__(self, types: Iterable[TypeEntity] = ()) -> None:
        """Build a collection, rejecting duplicate canonical identities."""
        table: dict[Identifier, TypeEntity] = {}
        for t in types:
            key = canonicalize(t.identifier)
            if key in table:
                raise DuplicateIdentityError(str(key))
            table[key] = t
        object.__setattr__(self, "_types", MappingProxyType(table))

    @classmethod
    def _from_table(cls, table: dict[Identifier, TypeEntity]) -> TypeCollection:
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_types", MappingProxyType(table))
        return instance

    # -----------------------------
    # Read interface
    # -----------------------------

    @property
    def types(self) -> Mapping[Identifier, TypeEntity]:
        """Read-only view of the underlying canonical-key table."""
        return self._types

    def keys(self) -> list[Identifier]:
        """Return canonical keys in sorted order."""
        return sorted(self._types, key=str)

    def __iter__(self) -> Iterator[TypeEntity]:
        for key in self.keys():
            yield self._types[key]

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, TypeEntity):
            item = item.identifier
        if not isinstance(item, Identifier):
            return False
        return canonicalize(item) in self._types

    def get(self, identifier: Identifier) -> TypeEntity | None:
        """Look up a type by any spelling of its identifier."""
        return self._types.get(canonicalize(identifier))

    def lookup(self, identifier: Identifier) -> TypeEntity:
        """Like :meth:`get` but raise ``KeyError`` when absent."""
        found = self.get(identifier)
        if found is None:
            raise KeyError(str(identifier))
        return found

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeCollection):
            return NotImplemented
        return dict(self._types) == dict(other._types)

    def __hash__(self) -> int:
        return hash(",".join(str(k) for k in self.keys()))

    def __repr__(self) -> str:
        return f"TypeCollection of {len(self)} types"

    # -----------------------------
    # Value-returning transformations
    # -----------------------------

    def add_type(self, type_: TypeEntity) -> TypeCollection:
        """Return a new collection with ``type_`` added."""
        return self.add_types([type_])

    def add_types(self, types: Iterable[TypeEntity]) -> TypeCollection:
        """Return a new collection with every entity added, validating uniqueness."""
        table = dict(self._types)
        for t in types:
            key = canonicalize(t.identifier)
            if key in table:
                raise DuplicateIdentityError(str(key))
            table[key] = t
        return TypeCollection._from_table(table)

    def union(self, other: TypeCollection) -> TypeCollection:
        """Combine two collections from distinct sources."""
        return self.add_types(other)

    def filter_visibility(self, include: NameFlags) -> TypeCollection:
        """Keep types and members whose visibility intersects ``include``.

        Entities carrying no visibility bit at all are kept.
        """
        table: dict[Identifier, TypeEntity] = {}
        for key, t in self._types.items():
            if not _visible(t.identifier.flags, include):
                continue
            changes: dict[str, Any] = {}
            for name in MEMBER_MAPS:
                members: Mapping[str, MemberEntity] = getattr(t, name)
                kept = {
                    k: m
                    for k, m in members.items()
                    if _visible(m.identifier.flags, include)
                }
                if len(kept) != len(members):
                    changes[name] = kept
            table[key] = _replace_maps(t, changes)
        return TypeCollection._from_table(table)

    # -----------------------------
    # Mutation is not supported
    # -----------------------------

    def _unsupported(self, *_args: object, **_kwargs: object) -> NoReturn:
        msg = "TypeCollection is immutable; use add_type/add_types instead"
        raise UnsupportedOperationError(msg)

    add = discard = remove = clear = pop = update = _unsupported
    __setitem__ = __delitem__ = _unsupported

    def __setattr__(self, name: str, value: object) -> NoReturn:
        self._unsupported()

    def __delattr__(self, name: str) -> NoReturn:
        self._unsupported()


def _visible(flags: NameFlags, include: NameFlags) -> bool:
    visibility = flags & NameFlags.ALL_VISIBILITIES
    return not visibility or bool(visibility & include)


def _replace_maps(t: TypeEntity, changes: dict[str, Any]) -> TypeEntity:
    if not changes:
        return t
    return replace(t, **changes)
