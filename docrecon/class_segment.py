"""One containing-namespace or containing-type level of an identifier."""

from collections.abc import Callable
from dataclasses import dataclass, field

from docrecon.name_flags import NameFlags


def render_type_parameters(type_parameters: tuple[str, ...]) -> str:
    """Render ``<A, B>``, or an empty string when there are none."""
    if not type_parameters:
        return ""
    return "<" + ", ".join(type_parameters) + ">"


@dataclass(frozen=True, eq=False)
class ClassSegment:
    """A path segment: name, declared generic parameter names and flags."""

    name: str
    type_parameters: tuple[str, ...] = ()
    flags: NameFlags = NameFlags(0)
    _rendered: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the parameter names and memoize ``Name<T1, T2>``."""
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))
        object.__setattr__(
            self, "_rendered", self.name + render_type_parameters(self.type_parameters)
        )

    @property
    def clr_name(self) -> str:
        """Return the name with a backtick arity suffix, e.g. ``List`1``."""
        if self.type_parameters:
            return f"{self.name}`{len(self.type_parameters)}"
        return self.name

    def replace_type_parameter_names(
        self, replacer: Callable[[str], str]
    ) -> "ClassSegment":
        return ClassSegment(
            self.name, tuple(replacer(t) for t in self.type_parameters), self.flags
        )

    def __str__(self) -> str:
        return self._rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassSegment):
            return NotImplemented
        return self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash(self._rendered)
