"""Free-text documentation attached to a type or member."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Metadata:
    """Summary, remarks, example and cross-reference text; all optional."""

    summary: str | None = None
    remarks: str | None = None
    example: str | None = None
    see: str | None = None
    see_also: str | None = None

    def with_summary(self, summary: str | None) -> "Metadata":
        return replace(self, summary=summary)

    def with_remarks(self, remarks: str | None) -> "Metadata":
        return replace(self, remarks=remarks)

    def with_example(self, example: str | None) -> "Metadata":
        return replace(self, example=example)

    def with_see(self, see: str | None) -> "Metadata":
        return replace(self, see=see)

    def with_see_also(self, see_also: str | None) -> "Metadata":
        return replace(self, see_also=see_also)

    @property
    def is_empty(self) -> bool:
        """Whether no text field is set."""
        return not any(
            (self.summary, self.remarks, self.example, self.see, self.see_also)
        )
