"""Fully-populated type references as they appear in parameter lists.

A ``PopulatedType`` is a dotted type path whose generic arguments are all
filled in, e.g. ``System.Collections.Generic.Dictionary<System.String, T1>[]``.
It is what a parameter *is*, as opposed to an ``Identifier`` which names a
declaration.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from docrecon.array_info import ArrayInfo


@dataclass(frozen=True, eq=False)
class PopulatedName:
    """One dotted segment of a populated type, with its generic arguments."""

    name: str
    type_arguments: tuple["PopulatedType", ...] = ()
    _rendered: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the argument list and memoize the rendering."""
        object.__setattr__(self, "type_arguments", tuple(self.type_arguments))
        rendered = self.name
        if self.type_arguments:
            rendered += "<" + ", ".join(str(t) for t in self.type_arguments) + ">"
        object.__setattr__(self, "_rendered", rendered)

    def replace_type_parameter_names(
        self, replacer: Callable[[str], str]
    ) -> "PopulatedName":
        """Return a copy with ``replacer`` applied to this and nested names."""
        return PopulatedName(
            replacer(self.name),
            tuple(
                t.replace_type_parameter_names(replacer) for t in self.type_arguments
            ),
        )

    def __str__(self) -> str:
        return self._rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PopulatedName):
            return NotImplemented
        return self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash(self._rendered)


@dataclass(frozen=True, eq=False)
class PopulatedType:
    """A dotted sequence of populated names plus optional array suffixes."""

    names: tuple[PopulatedName, ...]
    arrays: tuple[ArrayInfo, ...] = ()
    _rendered: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze sequences and memoize the rendering used for equality."""
        object.__setattr__(self, "names", tuple(self.names))
        object.__setattr__(self, "arrays", tuple(self.arrays))
        rendered = ".".join(str(n) for n in self.names) + "".join(
            str(a) for a in self.arrays
        )
        object.__setattr__(self, "_rendered", rendered)

    @classmethod
    def simple(cls, *names: str) -> "PopulatedType":
        """Build a non-generic, non-array type from plain dotted segments."""
        return cls(tuple(PopulatedName(n) for n in names))

    def with_arrays(self, arrays: Iterable[ArrayInfo]) -> "PopulatedType":
        return PopulatedType(self.names, tuple(arrays))

    def replace_type_parameter_names(
        self, replacer: Callable[[str], str]
    ) -> "PopulatedType":
        """Return a copy with ``replacer`` applied to every name segment."""
        return PopulatedType(
            tuple(n.replace_type_parameter_names(replacer) for n in self.names),
            self.arrays,
        )

    def __str__(self) -> str:
        return self._rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PopulatedType):
            return NotImplemented
        return self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash(self._rendered)
