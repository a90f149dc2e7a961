"""Logic for loading producer record files."""

from pathlib import Path
from typing import Any

import yaml

from docrecon.errors import SourceLoadError
from docrecon.records import DocumentationRecord, Source, StructuralRecord


def load_record_file(path: Path) -> Source:
    """Load one YAML record file into a Source.

    The file holds an optional ``name`` (defaults to the file stem) and two
    lists, ``structural`` and ``documentation``.
    """
    try:
        doc: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SourceLoadError(str(path), None, f"Cannot read record file: {e}") from e
    if not isinstance(doc, dict):
        msg = "Record file must contain a mapping at the top level"
        raise SourceLoadError(str(path), None, msg)

    try:
        structural = [
            StructuralRecord.from_dict(r) for r in doc.get("structural") or []
        ]
        documentation = [
            DocumentationRecord.from_dict(r) for r in doc.get("documentation") or []
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise SourceLoadError(str(path), None, f"Malformed record: {e}") from e

    return Source(str(doc.get("name") or path.stem), structural, documentation)
