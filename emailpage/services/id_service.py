"""Page identifier generation."""

from __future__ import annotations

import hashlib
import secrets
from datetime import UTC, datetime

from emailpage.config import MAX_HASH_LENGTH, MIN_HASH_LENGTH


def generate_page_id(length: int) -> str:
    """Generate a hex page identifier of exactly ``length`` characters.

    The identifier is the SHA-256 of the current UTC instant (ISO 8601 with
    milliseconds) concatenated with a fresh random value.  One digest gives 64
    hex characters; longer identifiers are extended by hashing the previous
    digest again.  The extension only lengthens the filename: collision
    resistance stays that of the first 256-bit hash.
    """
    if not MIN_HASH_LENGTH <= length <= MAX_HASH_LENGTH:
        msg = f"Page id length must be between {MIN_HASH_LENGTH} and {MAX_HASH_LENGTH}"
        raise ValueError(msg)

    now = datetime.now(UTC).isoformat(timespec="milliseconds")
    unique_string = now + str(secrets.randbits(64))

    digest = hashlib.sha256(unique_string.encode("utf-8")).hexdigest()
    chunks = [digest]
    while len(chunks) * len(digest) < length:
        digest = hashlib.sha256(digest.encode("ascii")).hexdigest()
        chunks.append(digest)
    return "".join(chunks)[:length]
