import random
import threading
import time

import pytest

from conftest import EMOJI_SEQUENCES_PATH, EMOJI_TEST_PATH, CountingLoader
from emoji_catalog import EmojiCatalog
from emoji_errors import EmptyCatalog, SourceUnavailable
from emoji_table_parser import Emoji, EmojiSequencesParser


def test_all_parses_once_and_caches(counting_loader):
    catalog = EmojiCatalog(counting_loader)
    assert not catalog.is_loaded

    first = catalog.all()
    second = catalog.all()

    assert counting_loader.calls == 1
    assert first is second
    assert len(first) == 12
    assert isinstance(first, tuple)
    assert catalog.is_loaded
    assert len(catalog) == 12


def test_concurrent_first_load_parses_once(emoji_test_text):
    release = threading.Event()
    loader = CountingLoader(emoji_test_text, delay_event=release)
    catalog = EmojiCatalog(loader)

    results = []
    errors = []
    start = threading.Barrier(8)

    def worker():
        try:
            start.wait(timeout=5)
            results.append(catalog.all())
        except Exception as e:  # collected for the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    # hold the first load open so the other threads queue up behind it
    assert loader.entered.wait(timeout=5)
    time.sleep(0.1)
    release.set()
    for t in threads:
        t.join(timeout=10)

    assert errors == []
    assert len(results) == 8
    assert loader.calls == 1
    assert all(r is results[0] for r in results)
    assert len(results[0]) == 12


def test_failed_load_is_retried(emoji_test_text):
    attempts = []

    def flaky_loader():
        attempts.append(1)
        if len(attempts) == 1:
            raise SourceUnavailable("Got 503 Service Unavailable, expected 200 OK")
        return emoji_test_text

    catalog = EmojiCatalog(flaky_loader)
    with pytest.raises(SourceUnavailable):
        catalog.all()
    assert not catalog.is_loaded

    assert len(catalog.all()) == 12
    assert len(attempts) == 2


def test_legacy_variant_catalog(emoji_sequences_text):
    catalog = EmojiCatalog(lambda: emoji_sequences_text, line_parser="emoji-sequences")
    emojis = catalog.all()
    assert len(emojis) == 11
    assert all(e.name == "" for e in emojis)
    assert catalog.search("watch") == []


def test_catalog_accepts_parser_instance(emoji_sequences_text):
    catalog = EmojiCatalog(lambda: emoji_sequences_text, line_parser=EmojiSequencesParser())
    assert catalog.all()[0] == Emoji((0x231A,))


def test_unknown_variant_is_rejected():
    with pytest.raises(ValueError):
        EmojiCatalog(lambda: "", line_parser="emoji-data")


def test_random_returns_catalog_members(counting_loader):
    catalog = EmojiCatalog(counting_loader, rng=random.Random(7))
    emojis = set(catalog.all())
    for _ in range(50):
        assert catalog.random() in emojis


def test_random_reaches_every_entry(counting_loader):
    catalog = EmojiCatalog(counting_loader, rng=random.Random(1234))
    seen = {catalog.random() for _ in range(2000)}
    assert seen == set(catalog.all())
    assert counting_loader.calls == 1


def test_random_on_empty_catalog():
    catalog = EmojiCatalog(lambda: "# nothing but comments\n\n")
    with pytest.raises(EmptyCatalog):
        catalog.random()
    # EmptyCatalog is also a LookupError
    with pytest.raises(LookupError):
        catalog.random()


def test_random_forwards_load_failure():
    def loader():
        raise SourceUnavailable("offline")

    with pytest.raises(SourceUnavailable):
        EmojiCatalog(loader).random()


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_blank_search_matches_nothing(counting_loader, query):
    catalog = EmojiCatalog(counting_loader)
    catalog.all()
    assert catalog.search(query) == []


def test_search_is_case_insensitive(counting_loader):
    catalog = EmojiCatalog(counting_loader)
    lower = catalog.search("poo")
    upper = catalog.search("POO")
    assert lower == upper
    assert [e.name for e in lower] == ["pile of poo"]


def test_search_keeps_catalog_order(counting_loader):
    catalog = EmojiCatalog(counting_loader)
    assert [e.name for e in catalog.search("grinning")] == ["grinning face", "grinning face with big eyes"]
    assert [e.name for e in catalog.search("Face")] == ["grinning face", "grinning face with big eyes", "clown face"]


def test_search_without_matches(counting_loader):
    assert EmojiCatalog(counting_loader).search("unicorn") == []


def test_search_forwards_load_failure():
    def loader():
        raise SourceUnavailable("offline")

    with pytest.raises(SourceUnavailable):
        EmojiCatalog(loader).search("clock")


def test_from_config_with_local_path():
    config = {"variant": "emoji-test", "source_path": EMOJI_TEST_PATH}
    catalog = EmojiCatalog.from_config(config)
    assert [e.name for e in catalog.search("clock")] == ["alarm clock"]


def test_from_config_legacy_variant():
    config = {"variant": "emoji-sequences", "source_path": EMOJI_SEQUENCES_PATH}
    assert len(EmojiCatalog.from_config(config).all()) == 11


def test_empty_table_is_loaded_again():
    tables = iter(["# nothing but comments\n", "23F0 ; fully-qualified # ⏰ E0.6 alarm clock\n"])
    attempts = []

    def loader():
        attempts.append(1)
        return next(tables)

    catalog = EmojiCatalog(loader)
    assert catalog.all() == ()
    assert not catalog.is_loaded

    assert catalog.all() == (Emoji((0x23F0,), "alarm clock"),)
    assert catalog.is_loaded
    catalog.all()
    assert len(attempts) == 2
