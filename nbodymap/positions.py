"""Reading and writing node positions and links as compact JSON arrays.

A positions file lists one ``[id,x,y,r]`` entry per line inside an outer
array. A links file lists ``[id,[[other_id,weight],...]]`` entries the
same way.
"""

import os
import re
from dataclasses import dataclass
from typing import Iterable

_ENTRY = re.compile(
    r"\s*\+?(\d+),\s*([+-]?\d+),\s*([+-]?\d+),\s*([+-]?\d+)\]"
)


@dataclass(frozen=True)
class PositionRecord:
    """The saved position of one paper: its id, integer coordinates and radius."""

    id: int
    x: int
    y: int
    r: int


class PositionsFormatError(ValueError):
    """A positions file does not follow the expected layout."""

    def __init__(self, message: str, entry: int | None = None) -> None:
        super().__init__(message)
        self.entry = entry


def _join_entries(entries: list[str]) -> str:
    body = "".join(
        entry + (",\n" if i + 1 < len(entries) else "\n")
        for i, entry in enumerate(entries)
    )
    return "[\n" + body + "]\n"


def format_positions(records: Iterable[PositionRecord]) -> str:
    """Return the text of a positions file holding ``records`` in order."""
    return _join_entries([f"[{rec.id},{rec.x},{rec.y},{rec.r}]" for rec in records])


def parse_positions(text: str) -> list[PositionRecord]:
    """Parse the text of a positions file into records.

    Whitespace before each number is accepted, and the comma and newline
    after each entry are optional.
    """
    if text[:1] != "[":
        got = text[:1] or "end of input"
        raise PositionsFormatError(f"reading first character, got {got!r}")
    pos = 1
    if text[pos:pos + 1] == "\n":
        pos += 1

    records: list[PositionRecord] = []
    while text[pos:pos + 1] == "[":
        match = _ENTRY.match(text, pos + 1)
        if match is None:
            raise PositionsFormatError(
                f"reading entry {len(records)}", entry=len(records)
            )
        ident, x, y, r = (int(group) for group in match.groups())
        records.append(PositionRecord(ident, x, y, r))
        pos = match.end()
        if text[pos:pos + 1] == ",":
            pos += 1
        if text[pos:pos + 1] == "\n":
            pos += 1

    if text[pos:pos + 1] != "]":
        got = text[pos:pos + 1] or "end of input"
        raise PositionsFormatError(f"reading last character, got {got!r}")
    return records


def read_positions(path: str | os.PathLike[str]) -> list[PositionRecord]:
    """Read and parse the positions file at ``path``."""
    with open(path, "r", encoding="ascii", newline="") as fh:
        return parse_positions(fh.read())


def write_positions(path: str | os.PathLike[str], records: Iterable[PositionRecord]) -> int:
    """Write ``records`` to ``path``, replacing it; return how many were written."""
    records = list(records)
    with open(path, "w", encoding="ascii", newline="") as fh:
        fh.write(format_positions(records))
    return len(records)


def format_links(links: Iterable[tuple[int, Iterable[tuple[int, float]]]]) -> str:
    """Return the text of a links file.

    ``links`` yields ``(paper_id, neighbours)`` pairs, where ``neighbours``
    yields ``(other_id, weight)`` pairs. Weights use six significant digits.
    """
    entries = []
    for paper_id, neighbours in links:
        inner = ",".join(f"[{other},{weight:.6g}]" for other, weight in neighbours)
        entries.append(f"[{paper_id},[{inner}]]")
    return _join_entries(entries)


def write_links(
    path: str | os.PathLike[str],
    links: Iterable[tuple[int, Iterable[tuple[int, float]]]],
) -> int:
    """Write ``links`` to ``path``, replacing it; return how many papers were written."""
    links = [(paper_id, list(neighbours)) for paper_id, neighbours in links]
    with open(path, "w", encoding="ascii", newline="") as fh:
        fh.write(format_links(links))
    return len(links)