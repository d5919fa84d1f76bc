"""
User identity helpers.
"""

# One century; keeps premium expiry inside the datetime range
MAX_DURATION_MINUTES = 100 * 365 * 24 * 60


def normalize_email(value: str) -> str:
    """
    Canonical form of an email used as an identity key.

    Surrounding whitespace is dropped and the domain part is lowercased,
    the same form ``EmailStr`` produces for request bodies. The local part
    is kept as given.
    """
    value = value.strip()
    local, at, domain = value.rpartition("@")
    if not at:
        return value
    return f"{local}@{domain.lower()}"
