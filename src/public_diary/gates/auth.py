"""Admin token check for version history access."""

import hmac


def verify_admin_token(supplied: str | None, expected: str | None) -> bool:
    """Return True if supplied matches the configured admin token.

    An unset admin token locks everyone out.
    """
    if not supplied or not expected:
        return False
    return hmac.compare_digest(supplied.encode(), expected.encode())
