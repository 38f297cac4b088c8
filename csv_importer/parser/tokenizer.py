from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

"""Quote-aware CSV tokenizer.

Two stages:

1. ``iter_logical_lines`` splits text into logical lines. A double quote toggles
   the inside-quotes state; ``\\n`` / ``\\r\\n`` end a line only outside quotes,
   otherwise they stay in the line as literal content (multi-line fields).
   Quotes are kept verbatim so that escaping is resolved once, per field.
   Lines that are blank after trimming are dropped.
2. ``tokenize_row`` splits one logical line on commas outside quotes, removes
   the quote characters (``""`` inside a quoted field becomes ``"``) and trims
   each field.

The line splitter consumes an iterable of text chunks, so a large file can be
streamed with ``read_text_chunks`` instead of being loaded whole.
"""

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "iter_logical_lines",
    "read_text_chunks",
    "tokenize_lines",
    "tokenize_row",
]

QUOTE = '"'
DELIMITER = ","
DEFAULT_CHUNK_SIZE = 64 * 1024


def read_text_chunks(
    path: Path, encoding: str = "utf-8", chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[str]:
    """Yield the decoded content of ``path`` in chunks.

    ``newline=""`` keeps ``\\r\\n`` untranslated; line endings are the
    tokenizer's business.
    """
    with path.open("r", encoding=encoding, newline="") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


def _iter_physical_lines(chunks: Iterable[str]) -> Iterator[str]:
    """Split chunks on ``\\n`` (terminator removed), across chunk boundaries."""
    pending = ""
    for chunk in chunks:
        if not chunk:
            continue
        pending += chunk
        parts = pending.split("\n")
        pending = parts.pop()
        yield from parts
    if pending:
        yield pending


def iter_logical_lines(chunks: Iterable[str] | str) -> Iterator[str]:
    """Yield logical CSV lines from text chunks (or a single string).

    A physical line with an odd number of quotes flips the inside-quotes
    state; while inside quotes, physical lines are joined back together with
    the newline they were split on. Doubled quotes flip twice, so they never
    change the state and need no special handling here.
    """
    if isinstance(chunks, str):
        chunks = (chunks,)

    buffer: list[str] = []
    inside_quotes = False
    for physical in _iter_physical_lines(chunks):
        if physical.count(QUOTE) % 2:
            inside_quotes = not inside_quotes
        if inside_quotes:
            buffer.append(physical)
            continue
        # \r of a \r\n terminator; a \r inside quotes was kept in buffer above
        if physical.endswith("\r"):
            physical = physical[:-1]
        buffer.append(physical)
        line = "\n".join(buffer)
        buffer = []
        if line.strip():
            yield line

    # unterminated quoted field at end of input: keep what we have
    if buffer:
        line = "\n".join(buffer)
        if line.strip():
            yield line


def tokenize_lines(text: str) -> list[str]:
    """Split a whole CSV text into its logical lines."""
    return list(iter_logical_lines(text))


def tokenize_row(line: str) -> list[str]:
    """Split one logical line into trimmed field values."""
    if QUOTE not in line:
        return [value.strip() for value in line.split(DELIMITER)]

    values: list[str] = []
    current: list[str] = []
    inside_quotes = False
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char == QUOTE:
            if inside_quotes and i + 1 < length and line[i + 1] == QUOTE:
                # escaped quote
                current.append(QUOTE)
                i += 2
                continue
            inside_quotes = not inside_quotes
        elif char == DELIMITER and not inside_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current).strip())
    return values
