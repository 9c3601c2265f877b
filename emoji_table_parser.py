# -----------------------------------------------------------------------------
# Module: emoji_table_parser.py
# Summary: Turns the Unicode emoji data tables into Emoji records. Two table
#          layouts are supported, each by its own line parser:
#            * emoji-test.txt       (EmojiTestParser, default): one emoji per
#              line with a qualification status and a name in the comment.
#            * emoji-sequences.txt  (EmojiSequencesParser): code points or
#              START..END ranges, no names.
# Inputs:  Table text as a str, an open text file, or any iterable of lines.
# Outputs: List of Emoji in table order.
# Context: A malformed data line is logged and skipped; only a failure to
#          read the text stream stops the parse (ParsingFailed).
# -----------------------------------------------------------------------------

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from emoji_codepoints import (
    RANGE_DELIMITER,
    decode_code_points,
    expand_code_point_range,
    extract_emoji_name,
    format_code_points,
)
from emoji_errors import InvalidCodePoint, ParsingFailed

# Highest code point chr() accepts; anything above renders as U+FFFD.
MAX_UNICODE = 0x10FFFF


@dataclass(frozen=True)
class Emoji:
    """
    One renderable emoji: a base character plus any modifiers, joiners and
    variation selectors, and its English name (empty for emoji-sequences.txt).

    Two emoji are equal when their code points and names are equal; group and
    subgroup only record where the line sat in emoji-test.txt.
    """

    code_points: tuple
    name: str = ""
    group: str = field(default="", compare=False)
    subgroup: str = field(default="", compare=False)

    def __post_init__(self):
        object.__setattr__(self, "code_points", tuple(self.code_points))
        if not self.code_points:
            raise ValueError("An emoji needs at least one code point")

    def __str__(self):
        return "".join(chr(cp) if cp <= MAX_UNICODE else "\ufffd" for cp in self.code_points)

    @property
    def unicode_codepoints(self):
        return format_code_points(self.code_points)


class LineParser(ABC):
    """Parses the data lines of one table layout into Emoji records."""

    name = ""

    def reset(self):
        """Forget any state carried over from a previous table."""

    def observe_comment(self, line):
        """Called with every comment line, in table order."""

    @abstractmethod
    def parse_line(self, line):
        """
        Parse one data line.

        Returns a (possibly empty) list of Emoji. Raises InvalidCodePoint when
        the line cannot be decoded.
        """
        raise NotImplementedError


class EmojiTestParser(LineParser):
    """
    emoji-test.txt lines, e.g.

        23F0 ; fully-qualified     # ⏰ E0.6 alarm clock

    Only fully-qualified and component rows become Emoji; the unqualified and
    minimally-qualified rows repeat the same emoji without the VS16.
    """

    name = "emoji-test"

    QUALIFIED_STATUSES = ("fully-qualified", "component")

    GROUP_RE = re.compile(r"^#\s*group:\s*(.*?)\s*$")
    SUBGROUP_RE = re.compile(r"^#\s*subgroup:\s*(.*?)\s*$")

    def __init__(self):
        self.group = ""
        self.subgroup = ""

    def reset(self):
        self.group = ""
        self.subgroup = ""

    def observe_comment(self, line):
        m = self.GROUP_RE.match(line)
        if m:
            self.group = m.group(1)
            self.subgroup = ""
            return
        m = self.SUBGROUP_RE.match(line)
        if m:
            self.subgroup = m.group(1)

    def parse_line(self, line):
        parts = line.split(";", 1)
        if len(parts) != 2:
            raise InvalidCodePoint(line.strip(), reason="has no ';' between code points and status")
        code_field, rest = parts

        if not rest.strip().startswith(self.QUALIFIED_STATUSES):
            return []

        code_points = decode_code_points(code_field.strip())
        name = extract_emoji_name(rest)
        return [Emoji(tuple(code_points), name, self.group, self.subgroup)]


class EmojiSequencesParser(LineParser):
    """
    emoji-sequences.txt lines, e.g.

        00A9 FE0F     ; Basic_Emoji  ; copyright    # E0.6   [1] (©️)
        23E9..23EC    ; Basic_Emoji  ; fast-forward button  # E0.6   [4] (⏩..⏬)

    A code point list is one emoji; a range is one emoji per code point.
    Everything after the first ';' is ignored, so these Emoji have no name.
    """

    name = "emoji-sequences"

    def parse_line(self, line):
        parts = line.split(";", 1)
        if len(parts) != 2:
            raise InvalidCodePoint(line.strip(), reason="has no ';' after the code points")
        code_field = parts[0].strip()

        if RANGE_DELIMITER in code_field:
            # In this case each code point is a different emoji
            return [Emoji((cp,)) for cp in expand_code_point_range(code_field)]
        return [Emoji(tuple(decode_code_points(code_field)))]


LINE_PARSERS = {
    EmojiTestParser.name: EmojiTestParser,
    EmojiSequencesParser.name: EmojiSequencesParser,
}


def get_line_parser(variant):
    """Return a line parser for a table variant name, or the parser passed in."""
    if isinstance(variant, LineParser):
        return variant
    try:
        return LINE_PARSERS[variant]()
    except KeyError:
        expected = ", ".join(repr(name) for name in LINE_PARSERS)
        raise ValueError(f"Unknown emoji table variant: {variant!r}. Expected one of {expected}.") from None


def parse_emoji_table(source, line_parser=None):
    """
    Parse a whole emoji table.

    Comment lines (first non-blank character '#') and blank lines are skipped;
    a data line that fails to decode is logged and skipped. An error raised
    while reading `source` itself is re-raised as ParsingFailed.
    """
    line_parser = get_line_parser(line_parser or EmojiTestParser.name)
    lines = source.splitlines() if isinstance(source, str) else source

    line_parser.reset()
    emojis = []
    skipped = 0
    line_number = 0
    try:
        for line_number, raw_line in enumerate(lines, 1):
            line = raw_line.rstrip("\r\n")
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith("#"):
                line_parser.observe_comment(stripped)
                continue

            try:
                emojis.extend(line_parser.parse_line(line))
            except InvalidCodePoint as e:
                skipped += 1
                logging.warning(f"Skipping line {line_number} of {line_parser.name} table: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ParsingFailed(f"Error reading emoji table after line {line_number}: {e}") from e

    logging.info(f"Parsed {len(emojis)} emoji from {line_parser.name} table ({skipped} line(s) skipped)")
    return emojis
