"""SEARCHADS — Ads Data File Reader.

The ads file holds one JSON object per line, optionally wrapped in bare
`[` / `]` lines with a trailing comma after each object. Lines are yielded
undecoded; the parser decodes them so a bad line only costs that record.
"""

from pathlib import Path
from typing import Iterator, NamedTuple, Union

from searchads.core.logging import get_logger

logger = get_logger("ingestion.source")

_ARRAY_BRACKETS = {"[", "]"}


class SourceRecord(NamedTuple):
    """A record line and its 0-based physical line number in the file."""

    line_number: int
    text: str


def load_records(path: Union[str, Path]) -> Iterator[SourceRecord]:
    """Yield each record line of the ads data file, in file order.

    Line numbers count every physical line, brackets and blanks included.
    I/O errors propagate to the caller.
    """
    path = Path(path)
    logger.info(f"Reading ads data from {path}")
    with path.open("r", encoding="utf-8") as f:
        for line_number, line in enumerate(f):
            line = line.strip()
            if not line or line in _ARRAY_BRACKETS:
                continue
            if line.endswith(","):
                line = line[:-1].rstrip()
            yield SourceRecord(line_number, line)
