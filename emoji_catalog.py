# -----------------------------------------------------------------------------
# Module: emoji_catalog.py
# Summary: In-memory catalog of every emoji in a Unicode emoji table, with a
#          random pick and a case-insensitive name search.
# Inputs:  A loader callable returning the table text (see emoji_source.py)
#          and the table variant to parse it with.
# Outputs: Emoji records (see emoji_table_parser.Emoji).
# Context: The table is parsed once, on first use, and kept for the life of
#          the catalog. A failed load leaves the catalog empty so the next
#          call tries again.
# -----------------------------------------------------------------------------

import logging
import random
import threading

from emoji_errors import EmptyCatalog
from emoji_source import loader_from_config
from emoji_table_parser import get_line_parser, parse_emoji_table


class EmojiCatalog:
    """
    Lazily loaded, read-only collection of emoji.

    Parameters
    ----------
    loader : callable
        Zero-argument callable returning the table as a str or an iterable of
        lines. Called at most once per successful load.
    line_parser : str or LineParser
        "emoji-test" (default) or "emoji-sequences", or a parser instance.
    rng : random.Random, optional
        Source of randomness for random(); a fresh Random() by default.
    """

    def __init__(self, loader, line_parser="emoji-test", rng=None):
        self._loader = loader
        self._line_parser = get_line_parser(line_parser)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        # None until the first successful load, then an immutable tuple
        self._emojis = None

    @classmethod
    def from_config(cls, config, rng=None):
        """Build a catalog from a config dict (see emoji_source.load_config)."""
        return cls(loader_from_config(config), config.get("variant") or "emoji-test", rng=rng)

    @property
    def is_loaded(self):
        return self._emojis is not None

    def __len__(self):
        return len(self.all())

    def all(self):
        """
        Return every emoji in table order.

        The first call loads and parses the table while holding the load lock;
        callers arriving during that load wait for it and share its result
        instead of parsing again. Later calls return the cached tuple without
        locking. A table with no entries is not cached; the next call loads it
        again.
        """
        emojis = self._emojis
        if emojis is not None:
            return emojis

        with self._lock:
            if self._emojis is None:
                source = self._loader()
                emojis = tuple(parse_emoji_table(source, self._line_parser))
                if not emojis:
                    logging.warning("Emoji table has no entries, catalog left empty")
                    return emojis
                self._emojis = emojis
                logging.info(f"Emoji catalog loaded with {len(emojis)} entries")
            return self._emojis

    def random(self):
        """Return one emoji chosen uniformly at random."""
        emojis = self.all()
        if not emojis:
            raise EmptyCatalog("Cannot pick a random emoji from an empty catalog")
        return self._rng.choice(emojis)

    def search(self, query):
        """
        Return every emoji whose name contains `query`, ignoring case, in
        table order. An empty or whitespace-only query matches nothing.
        """
        if not query or not query.strip():
            return []
        needle = query.lower()
        return [emoji for emoji in self.all() if needle in emoji.name.lower()]
