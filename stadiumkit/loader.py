"""File-level loading of stadium documents.

Reads stadium files from disk, hands their text to a JSON parser, and
passes the parsed value to :func:`stadiumkit.stadium.resolve`.  The parser
is a parameter: stadium files in the wild often contain comments, so
callers that need that can pass a comment-tolerant parser in place of the
default :func:`json.loads`.

Usage::

    from stadiumkit.loader import load_stadiums

    for result in load_stadiums("stadiums"):
        if result.ok:
            print(f"Successfully read {result.stadium.name}")
        else:
            print(f"{result.path.name}: {result.error}")
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from stadiumkit.errors import FormatError
from stadiumkit.stadium import Stadium, resolve

logger = logging.getLogger(__name__)

Parser = Callable[[str], object]


# ---------------------------------------------------------------------------
# LoadResult
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one stadium file.

    Attributes:
        path: The file that was read.
        stadium: The resolved stadium, or ``None`` if loading failed.
        error: The :class:`FormatError` that stopped resolution, or ``None``.
    """
    path: Path
    stadium: Stadium | None = None
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.stadium is not None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_stadium(path: str | Path, parse: Parser = json.loads) -> Stadium:
    """Read, parse and resolve one stadium file.

    Args:
        path: Filesystem path of the stadium file.
        parse: Turns the file text into a generic JSON value.

    Returns:
        The resolved :class:`Stadium`.

    Raises:
        FileNotFoundError: If the file does not exist.
        FormatError: If the file is not valid UTF-8, the text cannot be
            parsed, or the document does not resolve.
    """
    p = Path(path)
    if not p.exists():
        msg = f"Stadium file not found: {p}"
        raise FileNotFoundError(msg)
    try:
        document = parse(p.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise FormatError(f"cannot parse {p.name}: {exc}") from exc
    stadium = resolve(document)
    logger.info("Loaded stadium %r from %s", stadium.name, p)
    return stadium


def load_stadiums(directory: str | Path, parse: Parser = json.loads) -> list[LoadResult]:
    """Load every file in ``directory``, in name order.

    A file that fails to resolve does not stop the others; its
    :class:`FormatError` is recorded on its :class:`LoadResult`.

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
        NotADirectoryError: If ``directory`` is not a directory.
    """
    d = Path(directory)
    if not d.exists():
        msg = f"Stadium directory not found: {d}"
        raise FileNotFoundError(msg)
    if not d.is_dir():
        msg = f"Not a directory: {d}"
        raise NotADirectoryError(msg)

    results: list[LoadResult] = []
    for path in sorted(p for p in d.iterdir() if p.is_file()):
        try:
            stadium = load_stadium(path, parse=parse)
        except FormatError as exc:
            logger.warning("Failed to load %s: %s", path, exc)
            results.append(LoadResult(path=path, error=exc))
            continue
        results.append(LoadResult(path=path, stadium=stadium))
    logger.info(
        "Loaded %d of %d stadium file(s) from %s",
        sum(1 for r in results if r.ok), len(results), d,
    )
    return results
