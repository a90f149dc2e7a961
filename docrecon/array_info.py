"""Array suffix attached to a populated type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ArrayInfo:
    """One ``[...]`` suffix; ``dimensions`` is 0 for a bare ``[]``."""

    dimensions: int = 0

    def __str__(self) -> str:
        """Render as ``[]``, ``[,]``, ``[,,]`` and so on."""
        if self.dimensions > 0:
            return "[" + "," * (self.dimensions - 1) + "]"
        return "[]"
