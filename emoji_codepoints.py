# -----------------------------------------------------------------------------
# Module: emoji_codepoints.py
# Summary: Low-level helpers for the Unicode emoji data files: decoding
#          space-separated hex code points, expanding START..END ranges and
#          pulling the display name out of an emoji-test.txt comment.
# Inputs:  Single fields cut out of one line of emoji-test.txt or
#          emoji-sequences.txt (no surrounding whitespace).
# Outputs: Lists of integer code points, or the emoji name string.
# Context: Everything here raises InvalidCodePoint on malformed input; the
#          table parser decides whether that is fatal.
# -----------------------------------------------------------------------------

import re

from emoji_errors import InvalidCodePoint

RANGE_DELIMITER = ".."

# Largest value a code point field may hold (signed 32-bit).
MAX_CODE_POINT = 0x7FFFFFFF

HEX_TOKEN_RE = re.compile(r"[0-9A-Fa-f]+")

# "fully-qualified     # 😀 E1.0 grinning face" -> split after "E1.0 "
VERSION_TAG_RE = re.compile(r".*?E\d+\.\d+ ")


def parse_hex_code_point(token):
    """Parse one bare hex token (no 0x prefix, no sign) into an int."""
    if not HEX_TOKEN_RE.fullmatch(token):
        raise InvalidCodePoint(token, f'parsing "{token}": invalid syntax')
    value = int(token, 16)
    if value > MAX_CODE_POINT:
        raise InvalidCodePoint(token, f'parsing "{token}": value out of range')
    return value


def decode_code_points(code_points):
    """
    Decode a code point field such as "00A9 FE0F" into [0xA9, 0xFE0F].

    Tokens are separated by exactly one space, so a doubled space yields an
    empty token and fails. Ranges ("1F334..1F335") are rejected here and must
    go through expand_code_point_range instead.
    """
    if RANGE_DELIMITER in code_points:
        raise InvalidCodePoint(
            code_points, reason="is a code point range, expected single code points"
        )
    return [parse_hex_code_point(token) for token in code_points.split(" ")]


def expand_code_point_range(cp_range):
    """
    Expand a range like "1F380..1F393" into every code point it covers.

    The end point is included ("231A..231B" -> [0x231A, 0x231B]). A range
    whose two ends are equal covers nothing and returns []. A range that runs
    backwards is rejected.
    """
    parts = cp_range.split(RANGE_DELIMITER)
    if len(parts) != 2:
        raise InvalidCodePoint(cp_range, reason="does not look like a code point range")

    start = parse_hex_code_point(parts[0])
    end = parse_hex_code_point(parts[1])

    if start == end:
        return []
    if start > end:
        raise InvalidCodePoint(cp_range, reason="ends before it starts")
    return list(range(start, end + 1))


def extract_emoji_name(description):
    """
    Return the name that follows the emoji version tag in a line's comment.

    "fully-qualified     # ⏰ E0.6 alarm clock" -> "alarm clock"
    """
    parts = VERSION_TAG_RE.split(description, maxsplit=1)
    if len(parts) != 2:
        raise InvalidCodePoint(
            description.strip(), reason="has no emoji version tag (E<major>.<minor>) before the name"
        )
    return parts[1]


def format_code_points(code_points):
    """Render code points the way the emoji charts do: "U+1F600 U+FE0F"."""
    return " ".join(f"U+{cp:04X}" for cp in code_points)
