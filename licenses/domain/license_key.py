"""
License key generation.

Keys have the form ``PREFIX-RANDOMHEX-CHECKSUM`` where the checksum is a
truncated SHA-256 of the random part, so a key can be checked for typos
before it is looked up.
"""

import hashlib
import secrets

RANDOM_BYTES = 8
CHECKSUM_LENGTH = 6


def compute_checksum(random_part: str) -> str:
    """Return the fixed-length checksum for the random part of a key."""
    digest = hashlib.sha256(random_part.encode()).hexdigest()
    return digest[:CHECKSUM_LENGTH].upper()


def generate_license_key(prefix: str) -> str:
    """
    Generate a license key in format: PREFIX-RANDOMHEX-CHECKSUM.

    Args:
        prefix: Tier prefix (e.g., 'SNK-W' for the week pass)

    Returns:
        Generated license key string
    """
    random_part = secrets.token_hex(RANDOM_BYTES).upper()
    return f"{prefix}-{random_part}-{compute_checksum(random_part)}"


def has_valid_checksum(key: str) -> bool:
    """
    Check that a key is well formed and its checksum matches.

    The prefix itself may contain dashes, so the key is split from the right.
    """
    if not key:
        return False
    parts = key.rsplit("-", 2)
    if len(parts) != 3:
        return False
    prefix, random_part, checksum = parts
    if not prefix or len(random_part) != RANDOM_BYTES * 2:
        return False
    return secrets.compare_digest(compute_checksum(random_part), checksum.upper())
