"""Base32 for text: UTF-8 encode a string, then base32 the bytes (and back)."""

import logging

from b32.base32 import decode, encode

logger = logging.getLogger(__name__)


def encode_string(text: str) -> str:
    return encode(text.encode("utf-8"))


def decode_to_string(s: str) -> str | None:
    """Decode base32 text whose payload is UTF-8.

    Returns None if the base32 is malformed or the decoded bytes aren't
    valid UTF-8.
    """
    data = decode(s)
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug("decoded base32 payload is not UTF-8: %s", e)
        return None
