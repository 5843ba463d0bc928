"""
License key generation.

Keys look like ``PREFIX-XXXX-XXXX-XXXX-XXXX-XXXX-XXXX-XXXX-XXXX`` where the
body is the base32 encoding of 160 random bits from :mod:`secrets`.
"""

import base64
import re
import secrets

KEY_ENTROPY_BYTES = 20
KEY_GROUP_SIZE = 4
DEFAULT_KEY_PREFIX = "LA"

_PREFIX_RE = re.compile(r"^[A-Z0-9]{1,16}$")


def generate_license_key(prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Generate a license key.

    Args:
        prefix: Uppercase alphanumeric prefix (e.g. 'LA')

    Returns:
        Generated license key string

    Raises:
        ValueError: If the prefix is not 1-16 uppercase alphanumerics
    """
    if not _PREFIX_RE.match(prefix or ""):
        raise ValueError(f"Invalid license key prefix: {prefix!r}")

    # 20 bytes encode to exactly 32 base32 characters, no padding.
    body = base64.b32encode(secrets.token_bytes(KEY_ENTROPY_BYTES)).decode("ascii")
    groups = [body[i : i + KEY_GROUP_SIZE] for i in range(0, len(body), KEY_GROUP_SIZE)]
    return f"{prefix}-{'-'.join(groups)}"
