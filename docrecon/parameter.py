"""A single parameter of a method identifier."""

from collections.abc import Callable
from dataclasses import dataclass, field

from docrecon.name_flags import ParameterKind
from docrecon.populated_type import PopulatedType


@dataclass(frozen=True, eq=False)
class Parameter:
    """Parameter type, optional display name and passing kind."""

    type: PopulatedType
    name: str | None = None
    kind: ParameterKind = ParameterKind(0)
    _rendered: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Memoize the ``out Type name`` rendering."""
        parts: list[str] = []
        if self.kind & ParameterKind.OUT:
            parts.append("out")
        elif self.kind & ParameterKind.REF:
            parts.append("ref")
        parts.append(str(self.type))
        if self.name:
            parts.append(self.name)
        object.__setattr__(self, "_rendered", " ".join(parts))

    def with_name(self, name: str | None) -> "Parameter":
        return Parameter(self.type, name, self.kind)

    def with_kind(self, kind: ParameterKind) -> "Parameter":
        return Parameter(self.type, self.name, kind)

    def replace_type_parameter_names(
        self, replacer: Callable[[str], str]
    ) -> "Parameter":
        return Parameter(
            self.type.replace_type_parameter_names(replacer), self.name, self.kind
        )

    def __str__(self) -> str:
        return self._rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash(self._rendered)
