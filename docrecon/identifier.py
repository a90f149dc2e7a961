"""Structured form of a member-id string.

An ``Identifier`` names a type or member: the containing path, the name, the
member's own generic parameter names, its parameter list (for callables) and
a set of ``NameFlags``. Its string rendering is computed once at construction
and is the sole basis for equality, hashing and ordering.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from docrecon.class_segment import ClassSegment, render_type_parameters
from docrecon.name_flags import CALLABLE_FLAGS, MODIFIER_WORDS, NameFlags
from docrecon.parameter import Parameter

CONSTRUCTOR_FLAGS = NameFlags.CONSTRUCTOR | NameFlags.CLASS_CONSTRUCTOR


@dataclass(frozen=True, eq=False)
class Identifier:
    """Immutable identifier of a type or member."""

    class_path: tuple[ClassSegment, ...] = ()
    name: str = ""
    type_parameters: tuple[str, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    flags: NameFlags = NameFlags(0)
    _rendered: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze sequences and memoize the canonical rendering."""
        object.__setattr__(self, "class_path", tuple(self.class_path))
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "type_parameters", tuple(self.type_parameters))
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "flags", NameFlags(self.flags))
        object.__setattr__(
            self,
            "_rendered",
            self.stringify(
                include_classes=True,
                include_modifiers=False,
                include_method_parameters=True,
            ),
        )

    # -----------------------------
    # Derived views
    # -----------------------------

    @property
    def is_callable(self) -> bool:
        """Whether this names a method or constructor."""
        return bool(self.flags & CALLABLE_FLAGS)

    @property
    def clr_name(self) -> str:
        """Return the name with its arity marker appended (doubled for methods)."""
        if not self.type_parameters:
            return self.name
        marker = "``" if self.flags & NameFlags.METHOD else "`"
        return f"{self.name}{marker}{len(self.type_parameters)}"

    @property
    def parent(self) -> "Identifier | None":
        """Return the identifier of the enclosing type, or None at top level."""
        if not self.class_path:
            return None
        last = self.class_path[-1]
        return Identifier(
            self.class_path[:-1], last.name, last.type_parameters, (), last.flags
        )

    @property
    def container(self) -> str:
        """Return the rendering of the enclosing type ('' at top level)."""
        parent = self.parent
        return str(parent) if parent is not None else ""

    @property
    def name_with_parameters(self) -> str:
        """Return the rendering without the containing path."""
        return self.stringify(
            include_classes=False,
            include_modifiers=False,
            include_method_parameters=True,
        )

    @property
    def signature(self) -> str:
        """Return the raw name and parameter list, without the containing path."""
        return self.stringify(
            include_classes=False,
            include_modifiers=False,
            include_method_parameters=True,
            constructor_class_name=False,
        )

    @property
    def display_name(self) -> str:
        """Return the name, substituting the class name for constructors."""
        if self.flags & CONSTRUCTOR_FLAGS and self.class_path:
            return self.class_path[-1].name
        return self.name

    def as_class_path(self) -> tuple[ClassSegment, ...]:
        """Return the path of a child of this identifier."""
        return (
            *self.class_path,
            ClassSegment(self.name, self.type_parameters, self.flags),
        )

    def all_type_parameter_names(self) -> list[str]:
        """Return every declared generic name, outermost path level first."""
        names = [t for c in self.class_path for t in c.type_parameters]
        names.extend(self.type_parameters)
        return names

    # -----------------------------
    # Copy constructors
    # -----------------------------

    def with_name(self, name: str) -> "Identifier":
        return Identifier(
            self.class_path, name, self.type_parameters, self.parameters, self.flags
        )

    def with_type_parameters(self, type_parameters: Iterable[str]) -> "Identifier":
        return Identifier(
            self.class_path,
            self.name,
            tuple(type_parameters),
            self.parameters,
            self.flags,
        )

    def with_parameters(self, parameters: Iterable[Parameter]) -> "Identifier":
        return Identifier(
            self.class_path,
            self.name,
            self.type_parameters,
            tuple(parameters),
            self.flags,
        )

    def with_flags(self, flags: NameFlags) -> "Identifier":
        return Identifier(
            self.class_path, self.name, self.type_parameters, self.parameters, flags
        )

    def replace_type_parameter_names(
        self, replacer: Callable[[str], str]
    ) -> "Identifier":
        """Apply ``replacer`` to every declared and referenced generic name."""
        return Identifier(
            tuple(c.replace_type_parameter_names(replacer) for c in self.class_path),
            self.name,
            tuple(replacer(t) for t in self.type_parameters),
            tuple(p.replace_type_parameter_names(replacer) for p in self.parameters),
            self.flags,
        )

    # -----------------------------
    # Rendering
    # -----------------------------

    def stringify(
        self,
        *,
        include_classes: bool = True,
        include_modifiers: bool = False,
        include_method_parameters: bool = True,
        constructor_class_name: bool = True,
    ) -> str:
        """Render the identifier in C#-like form.

        With ``constructor_class_name`` off, constructors keep their raw
        ``#ctor`` or ``##ctor`` name.
        """
        parts: list[str] = []

        if include_modifiers:
            parts.extend(
                f"{word} " for flag, word in MODIFIER_WORDS if self.flags & flag
            )

        if include_classes and self.class_path:
            parts.append(".".join(str(c) for c in self.class_path))
            parts.append(".")

        parts.append(self.display_name if constructor_class_name else self.name)
        parts.append(render_type_parameters(self.type_parameters))

        # Indexed properties carry parameters without any callable flag.
        if include_method_parameters and (self.is_callable or self.parameters):
            parts.append("(" + ", ".join(str(p) for p in self.parameters) + ")")

        return "".join(parts)

    def __str__(self) -> str:
        return self._rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash(self._rendered)

    def __lt__(self, other: "Identifier") -> bool:
        return self._rendered < other._rendered
