"""RFC 4648 base32 encoding/decoding.

Alphabet: "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567". Every 5 input bytes (40 bits)
become 8 output characters, each carrying 5 bits, most significant first.
A trailing partial group is zero-filled to the next 5-bit boundary and the
output is padded with '=' to a multiple of 8 characters:

    n % 5   symbols   padding
      0        0         0
      1        2         6       8 bits  -> 10, 2 zero bits
      2        4         4      16 bits  -> 20, 4 zero bits
      3        5         3      24 bits  -> 25, 1 zero bit
      4        7         1      32 bits  -> 35, 3 zero bits

Decoding is lenient at the edges: trailing '=' and whitespace are ignored,
whitespace inside the text is skipped, and the zero-fill bits of the last
group are dropped without being checked. Everything else that is not in the
alphabet makes the whole decode fail.

See: RFC 4648 section 6
"""

import logging

logger = logging.getLogger(__name__)

CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="
WHITESPACE = "\n\r \t"

_TRAILING = PAD + WHITESPACE
_MASK40 = (1 << 40) - 1

# bytes in the final group -> symbols emitted for it
_TAIL_SYMBOLS = {0: 0, 1: 2, 2: 4, 3: 5, 4: 7}

# symbols in the final group -> (zero-fill bits to drop, bytes to emit)
# 1, 3 and 6 symbols can't come from any byte count and are rejected.
_TAIL_BYTES = {0: (0, 0), 2: (2, 1), 4: (4, 2), 5: (1, 3), 7: (3, 4)}


def encode(data: bytes) -> str:
    """Encode bytes to padded base32.

    Full 5-byte groups are packed into a 40-bit integer and sliced into
    eight 5-bit indexes. The last partial group is left-shifted until its
    bit count is a multiple of 5, so the missing low bits read as zero.
    """
    data = bytes(data)
    n = len(data)
    end = n - n % 5
    result = []
    for i in range(0, end, 5):
        buf = int.from_bytes(data[i:i + 5], "big")
        for shift in range(35, -1, -5):
            result.append(CHARS[(buf >> shift) & 0x1F])

    rest = n - end
    if rest:
        symbols = _TAIL_SYMBOLS[rest]
        buf = int.from_bytes(data[end:], "big") << (symbols * 5 - rest * 8)
        for shift in range((symbols - 1) * 5, -1, -5):
            result.append(CHARS[(buf >> shift) & 0x1F])
        result.append(PAD * (8 - symbols))
    return "".join(result)


def _value(ch: str) -> int:
    """5-bit value of an alphabet character, -1 if it isn't one."""
    if "A" <= ch <= "Z":
        return ord(ch) - 65
    if "2" <= ch <= "7":
        return ord(ch) - 24
    return -1


def decode(s: str) -> bytes | None:
    """Decode base32 text to bytes, or return None if it's malformed.

    Malformed means: a character outside A-Z2-7 that isn't whitespace
    (this includes '=' anywhere before the trailing run), or a number of
    symbols that leaves 1, 3 or 6 characters in the last group.
    """
    limit = len(s)
    while limit > 0 and s[limit - 1] in _TRAILING:
        limit -= 1

    out = bytearray(limit * 5 // 8)
    out_count = 0
    in_count = 0
    buf = 0
    for i in range(limit):
        ch = s[i]
        if ch in WHITESPACE:
            continue
        bits = _value(ch)
        if bits < 0:
            logger.debug("rejecting base32 input: bad character %r at %d", ch, i)
            return None

        buf = ((buf << 5) | bits) & _MASK40
        in_count += 1
        if in_count % 8 == 0:
            out[out_count:out_count + 5] = buf.to_bytes(5, "big")
            out_count += 5

    tail = _TAIL_BYTES.get(in_count % 8)
    if tail is None:
        logger.debug("rejecting base32 input: %d symbols in final group", in_count % 8)
        return None
    drop, nbytes = tail
    if nbytes:
        buf >>= drop
        out[out_count:out_count + nbytes] = (buf & ((1 << nbytes * 8) - 1)).to_bytes(nbytes, "big")
        out_count += nbytes

    if out_count == len(out):
        return bytes(out)
    return bytes(out[:out_count])


def decode_strict(s: str) -> bytes:
    """Like decode(), but raise ValueError on malformed input."""
    result = decode(s)
    if result is None:
        raise ValueError(f"invalid base32 input: {s!r}")
    return result
