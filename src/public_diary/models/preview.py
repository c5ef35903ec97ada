"""Content excerpts for listings."""

PREVIEW_LENGTH = 100


def make_preview(content: str, length: int = PREVIEW_LENGTH, marker: str = "...") -> str:
    """Return the first ``length`` characters of content, plus marker if cut.

    Lengths count code points, so multi-byte text is not cut short.
    """
    if len(content) > length:
        return f"{content[:length]}{marker}"
    return content
