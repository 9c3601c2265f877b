# -----------------------------------------------------------------------------
# Module: emoji_source.py
# Summary: Gets the raw emoji table text, either from unicode.org or from a
#          local copy of the file, and loads the YAML configuration that says
#          which one to use.
# Inputs:  config.yml (optional), table URL or local path.
# Outputs: Table text for emoji_table_parser, config dict for the catalog.
# Context: No retries: a failed fetch raises SourceUnavailable and the caller
#          decides what to do next.
# -----------------------------------------------------------------------------

import logging
import os

import requests
import yaml
from requests.exceptions import RequestException

from emoji_errors import ParsingFailed, SourceUnavailable

EMOJI_TEST_URL = "https://unicode.org/Public/emoji/15.1/emoji-test.txt"
EMOJI_SEQUENCES_URL = "https://www.unicode.org/Public/emoji/13.1/emoji-sequences.txt"

DEFAULT_URLS = {
    "emoji-test": EMOJI_TEST_URL,
    "emoji-sequences": EMOJI_SEQUENCES_URL,
}

DEFAULT_TIMEOUT = 30

DEFAULT_CONFIG = {
    "variant": "emoji-test",
    "source_url": None,
    "source_path": None,
    "timeout": DEFAULT_TIMEOUT,
    "log_level": "INFO",
    "log_file": None,
}


def load_config(config_path="config.yml"):
    """Load configuration from YAML file, falling back to defaults."""
    config = dict(DEFAULT_CONFIG)
    if not os.path.exists(config_path):
        return config

    with open(config_path, "r", encoding="utf-8") as file:
        loaded = yaml.safe_load(file) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file '{config_path}' must contain a mapping")

    config.update({key: value for key, value in loaded.items() if key in DEFAULT_CONFIG})
    return config


def fetch_emoji_table(url, timeout=DEFAULT_TIMEOUT):
    """Download an emoji table and return its text. Anything but 200 OK fails."""
    logging.info(f"Fetching emoji table from {url}")
    try:
        response = requests.get(url, timeout=timeout)
    except RequestException as e:
        raise SourceUnavailable(f"Failed to fetch emoji table from {url}: {e}", url=url) from e

    if response.status_code != 200:
        raise SourceUnavailable(
            f"Got {response.status_code} {response.reason}, expected 200 OK from {url!r}",
            url=url,
            status_code=response.status_code,
        )

    # unicode.org serves these as text/plain without a charset
    response.encoding = "utf-8"
    return response.text


def read_emoji_table(path):
    """Read a local copy of an emoji table."""
    logging.info(f"Reading emoji table from {path}")
    try:
        with open(path, "r", encoding="utf-8") as file:
            return file.read()
    except OSError as e:
        raise SourceUnavailable(f"Failed to open emoji table '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise ParsingFailed(f"Emoji table '{path}' is not valid UTF-8: {e}") from e


def make_loader(url=None, path=None, timeout=DEFAULT_TIMEOUT):
    """
    Build the zero-argument callable a catalog uses to get its table.

    A local path wins over a URL; with neither, the emoji-test.txt URL is used.
    """
    if path:
        return lambda: read_emoji_table(path)
    url = url or EMOJI_TEST_URL
    return lambda: fetch_emoji_table(url, timeout=timeout)


def loader_from_config(config):
    """make_loader() driven by a config dict from load_config()."""
    variant = config.get("variant") or DEFAULT_CONFIG["variant"]
    url = config.get("source_url") or DEFAULT_URLS.get(variant, EMOJI_TEST_URL)
    timeout = config.get("timeout") or DEFAULT_TIMEOUT
    return make_loader(url=url, path=config.get("source_path"), timeout=timeout)
