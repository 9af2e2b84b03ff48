#!/usr/bin/env python3
"""Resolve every stadium file in a directory.

Reads each file in the directory (``stadiums/`` by default), parses it as
JSON, resolves it, and prints one line per file.  Exits non-zero if any
file failed to resolve.

Design notes:
  - Uses print() for the per-file report (not logging) because this is a
    user-facing CLI; logging is reserved for diagnostics and is switched
    to DEBUG with ``--verbose``.
  - Only plain JSON is parsed here.  Stadium files with comments need a
    comment-tolerant parser passed to ``load_stadiums(parse=...)``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from stadiumkit.loader import load_stadiums


def main(argv: list[str] | None = None) -> int:
    """Resolve all stadiums in the given directory and report the outcome."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "directory", nargs="?", default="stadiums",
        help="directory containing stadium files (default: stadiums)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="log resolution details",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        results = load_stadiums(args.directory)
    except (FileNotFoundError, NotADirectoryError) as exc:
        print(f"ERROR: {exc}")
        return 1

    failed = 0
    for result in results:
        if result.stadium is not None:
            print(f"Successfully read {result.stadium.name}")
        else:
            failed += 1
            print(f"FAILED {result.path.name}: {result.error}")

    if failed:
        print(f"{failed} of {len(results)} stadium file(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
