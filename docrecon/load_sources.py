"""Load, merge and union many sources, collecting failures per source."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from docrecon.build_documentation import build_documentation_collection
from docrecon.build_structural import (
    COMPILER_GENERATED_PREFIXES,
    build_structural_collection,
)
from docrecon.errors import DuplicateIdentityError, SourceLoadError
from docrecon.merge import merge_collections
from docrecon.name_flags import NameFlags
from docrecon.records import Source
from docrecon.type_collection import TypeCollection

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """The union of every source that loaded, plus every source that did not."""

    collection: TypeCollection
    failures: list[SourceLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def load_source(
    source: Source,
    include: NameFlags = NameFlags.ALL_VISIBILITIES,
    *,
    skip_compiler_generated: bool = True,
    compiler_generated_prefixes: Iterable[str] = COMPILER_GENERATED_PREFIXES,
) -> TypeCollection:
    """Build both halves of one source and merge them."""
    structural = build_structural_collection(
        source.structural,
        include,
        skip_compiler_generated=skip_compiler_generated,
        compiler_generated_prefixes=compiler_generated_prefixes,
        source=source.name,
    )
    documentation = build_documentation_collection(
        source.documentation, source=source.name
    )
    return merge_collections(structural, documentation)


def load_sources(
    sources: Iterable[Source],
    *,
    fail_fast: bool = False,
    include: NameFlags = NameFlags.ALL_VISIBILITIES,
    skip_compiler_generated: bool = True,
    compiler_generated_prefixes: Iterable[str] = COMPILER_GENERATED_PREFIXES,
) -> LoadResult:
    """Load every source; a failing source contributes nothing to the result.

    With ``fail_fast`` the first ``SourceLoadError`` propagates instead of
    being collected.
    """
    collection = TypeCollection()
    failures: list[SourceLoadError] = []

    for source in sources:
        try:
            merged = load_source(
                source,
                include,
                skip_compiler_generated=skip_compiler_generated,
                compiler_generated_prefixes=compiler_generated_prefixes,
            )
            collection = _union(collection, merged, source.name)
        except SourceLoadError as e:
            logger.error("Failed to load source %s: %s", source.name, e)
            if fail_fast:
                raise
            failures.append(e)
            continue
        logger.info("Loaded source %s: %d types", source.name, len(merged))

    return LoadResult(collection, failures)


def _union(
    collection: TypeCollection, merged: TypeCollection, name: str
) -> TypeCollection:
    try:
        return collection.union(merged)
    except DuplicateIdentityError as e:
        raise SourceLoadError(name, e.key, str(e)) from e
