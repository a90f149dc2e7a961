"""Exception hierarchy for identifier parsing, collection building and merging."""


class DocReconError(Exception):
    """Base class for every error raised by docrecon."""


class NameParseError(DocReconError, ValueError):
    """An identifier string violates the member-id grammar."""

    def __init__(self, expectation: str, offset: int) -> None:
        """Record what was expected and the 0-based character offset."""
        self.expectation = expectation
        self.offset = offset
        super().__init__(f"{expectation} at character {offset}")


class NameLexError(NameParseError):
    """An identifier string contains a character no token rule matches."""


class BackReferenceError(NameParseError, IndexError):
    """A generic back-reference points past the declared parameter list."""


class DuplicateIdentityError(DocReconError, KeyError):
    """Two entities with the same canonical identity were added to one collection."""

    def __init__(self, key: str) -> None:
        """Record the colliding canonical key."""
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        """Return a readable message instead of KeyError's quoted repr."""
        return f"Duplicate canonical identity: {self.key}"


class UnsupportedOperationError(DocReconError, TypeError):
    """A mutation was attempted on a read-only collection."""


class SourceLoadError(DocReconError):
    """A record in one input source failed; the whole source is abandoned."""

    def __init__(self, source: str, identifier: str | None, message: str) -> None:
        """Capture source name and offending identifier for reporting."""
        self.source = source
        self.identifier = identifier
        if identifier:
            super().__init__(f"{source}: {identifier!r}: {message}")
        else:
            super().__init__(f"{source}: {message}")


class AggregateLoadError(DocReconError):
    """One or more sources failed to load."""

    def __init__(self, failures: list[SourceLoadError]) -> None:
        """Keep every failure so they can be reported together."""
        self.failures = failures
        lines = [f"{len(failures)} source(s) failed to load:"]
        lines.extend(f"  - {f}" for f in failures)
        super().__init__("\n".join(lines))
