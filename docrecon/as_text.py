"""Logic for converting documentation fields to plain text."""


def as_text(v: object) -> str | None:
    """Convert a value to stripped text; None when nothing remains.

    Lists are joined line by line, skipping empty entries.
    """
    if v is None:
        return None
    if isinstance(v, str):
        text = v.strip()
    elif isinstance(v, list):
        text = "\n".join(t for t in (as_text(x) for x in v) if t)
    else:
        text = str(v).strip()
    return text or None
