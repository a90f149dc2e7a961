"""Normalization of identifiers to a position-based canonical form."""

from docrecon.class_segment import ClassSegment
from docrecon.identifier import Identifier
from docrecon.parameter import Parameter


def canonicalize(identifier: Identifier) -> Identifier:
    """Return ``identifier`` with generic names replaced by ``T1``, ``T2``, ...

    Policy:
    - Declared names are numbered across the class path, outermost first,
      then the member's own type parameters.
    - References inside the parameter list follow the same mapping; names
      that were never declared are left alone.
    - Parameter display names and kinds are dropped.
    """
    mapping: dict[str, str] = {}
    position = 0

    def declare(name: str) -> str:
        nonlocal position
        position += 1
        # Inner declarations shadow outer ones of the same name.
        mapping[name] = f"T{position}"
        return mapping[name]

    class_path = tuple(
        ClassSegment(c.name, tuple(declare(t) for t in c.type_parameters), c.flags)
        for c in identifier.class_path
    )
    type_parameters = tuple(declare(t) for t in identifier.type_parameters)

    def rename(name: str) -> str:
        return mapping.get(name, name)

    parameters = tuple(
        Parameter(p.type.replace_type_parameter_names(rename))
        for p in identifier.parameters
    )
    return Identifier(
        class_path, identifier.name, type_parameters, parameters, identifier.flags
    )


def canonical_key(identifier: Identifier) -> str:
    """Return the canonical rendering used as a merge key."""
    return str(canonicalize(identifier))
