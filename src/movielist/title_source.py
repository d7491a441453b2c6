"""Load the list of titles to look up from a newline-delimited text file."""

from pathlib import Path

from loguru import logger

from .errors import TitleSourceError

log = logger.bind(stage="titles")


def load_titles(path: Path) -> list[str]:
    """Read one title per line, in file order.

    Line endings are stripped but nothing else is: blank lines and duplicates
    are kept and each one is looked up. Raises TitleSourceError if the file
    cannot be read or decoded.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.error(f"Unable to load local list of movie titles from {path}: {e}")
        raise TitleSourceError(path, str(e)) from e

    # Only \n and \r\n end a line; other separators stay part of the title
    titles = [line.removesuffix("\r") for line in text.split("\n")]
    if titles and titles[-1] == "":
        titles.pop()
    log.debug(f"Loaded {len(titles)} titles from {path}")
    return titles
