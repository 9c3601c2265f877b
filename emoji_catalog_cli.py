# -----------------------------------------------------------------------------
# Script: emoji_catalog_cli.py
# Summary: Command-line front end for the emoji catalog: print random emoji,
#          search emoji by name, or export the whole catalog to CSV.
# Inputs:  config.yml (optional; see emoji_source.DEFAULT_CONFIG for keys),
#          emoji-test.txt or emoji-sequences.txt from unicode.org or disk.
# Outputs: Emoji printed to stdout, or a CSV with columns
#          emoji, unicode_codepoints, name, group, subgroup.
# Usage:   emoji-catalog search "red heart"
#          emoji-catalog --variant emoji-sequences random --count 5
#          emoji-catalog --source-path emoji-test.txt export emoji_catalog.csv
# -----------------------------------------------------------------------------

import argparse
import logging
import sys

import pandas as pd
import yaml

from emoji_catalog import EmojiCatalog
from emoji_errors import EmojiDataError
from emoji_source import DEFAULT_CONFIG, load_config
from emoji_table_parser import LINE_PARSERS

EXPORT_COLUMNS = ["emoji", "unicode_codepoints", "name", "group", "subgroup"]


def setup_logging(config):
    level = getattr(logging, str(config.get("log_level") or "INFO").upper(), logging.INFO)
    # force: replace any handler a library call installed before this point
    logging.basicConfig(
        filename=config.get("log_file"),
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )


def format_emoji(emoji):
    if emoji.name:
        return f"{emoji} ({emoji.unicode_codepoints}) - {emoji.name}"
    return f"{emoji} ({emoji.unicode_codepoints})"


def catalog_to_dataframe(emojis):
    """One row per emoji, in catalog order."""
    rows = [
        {
            "emoji": str(emoji),
            "unicode_codepoints": emoji.unicode_codepoints,
            "name": emoji.name,
            "group": emoji.group,
            "subgroup": emoji.subgroup,
        }
        for emoji in emojis
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Random pick and name search over the Unicode emoji list")
    parser.add_argument("--config-path", type=str, default="config.yml")
    parser.add_argument("--variant", choices=sorted(LINE_PARSERS), help="Emoji table layout to parse")
    parser.add_argument("--source-url", type=str, help="Fetch the table from this URL")
    parser.add_argument("--source-path", type=str, help="Read the table from this local file")

    commands = parser.add_subparsers(dest="command", required=True)

    random_cmd = commands.add_parser("random", help="Print random emoji")
    random_cmd.add_argument("--count", type=int, default=1)

    search_cmd = commands.add_parser("search", help="Search emoji by name")
    search_cmd.add_argument("query")

    export_cmd = commands.add_parser("export", help="Write the catalog to a CSV file")
    export_cmd.add_argument("output_csv")

    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config_path)
    except (ValueError, yaml.YAMLError) as e:
        setup_logging(DEFAULT_CONFIG)
        logging.error(f"Failed to read configuration '{args.config_path}': {e}")
        return 1

    for key in ("variant", "source_url", "source_path"):
        value = getattr(args, key)
        if value:
            config[key] = value
    setup_logging(config)

    try:
        catalog = EmojiCatalog.from_config(config)

        if args.command == "random":
            for _ in range(args.count):
                print(format_emoji(catalog.random()))

        elif args.command == "search":
            results = catalog.search(args.query)
            print(f"Found {len(results)} matching emojis")
            for emoji in results:
                print(format_emoji(emoji))

        elif args.command == "export":
            df = catalog_to_dataframe(catalog.all())
            df.to_csv(args.output_csv, index=False, encoding="utf-8")
            print(f"Saved {len(df)} emoji to {args.output_csv}")

    except (EmojiDataError, ValueError) as e:
        logging.error(f"Emoji catalog command '{args.command}' failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
