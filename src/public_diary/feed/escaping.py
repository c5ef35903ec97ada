"""Escaping for XML and HTML text.

The two differ only in the apostrophe: XML has the named ``&apos;``
entity, while HTML 4 does not, so HTML gets the numeric form.
"""


def _escape_common(text: str) -> str:
    # & first, or the entities below would be double-escaped
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def escape_xml(text: str) -> str:
    """Escape text for XML element content or attribute values."""
    return _escape_common(text).replace("'", "&apos;")


def escape_html(text: str) -> str:
    """Escape text for HTML element content or attribute values."""
    return _escape_common(text).replace("'", "&#x27;")
