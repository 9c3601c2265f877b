import os
import threading

import pytest

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

EMOJI_TEST_PATH = os.path.join(DATA_DIR, "emoji-test-excerpt.txt")
EMOJI_SEQUENCES_PATH = os.path.join(DATA_DIR, "emoji-sequences-excerpt.txt")


def read_data(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class CountingLoader:
    """Loader that records how many times the catalog asked for the table."""

    def __init__(self, text, delay_event=None):
        self.text = text
        self.calls = 0
        self.delay_event = delay_event
        self.entered = threading.Event()
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
        self.entered.set()
        if self.delay_event is not None:
            self.delay_event.wait(timeout=5)
        return self.text


@pytest.fixture
def emoji_test_text():
    return read_data(EMOJI_TEST_PATH)


@pytest.fixture
def emoji_sequences_text():
    return read_data(EMOJI_SEQUENCES_PATH)


@pytest.fixture
def counting_loader(emoji_test_text):
    return CountingLoader(emoji_test_text)
