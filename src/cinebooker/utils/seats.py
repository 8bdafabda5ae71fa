"""Seat identifier parsing and display helpers."""

import re

from cinebooker.exceptions import InvalidSeatError

SEAT_ID_RE = re.compile(r"^(\d+)-(\d+)$")


def format_seat_id(row: int, seat: int) -> str:
    return f"{row}-{seat}"


def parse_seat_id(seat_id: str) -> tuple[int, int]:
    """
    Split a seat id into (row, seat).

    Args:
        seat_id: "<row>-<seat>" with 1-based integers, e.g. "3-12"

    Returns:
        Tuple of row and seat numbers

    Raises:
        InvalidSeatError: If the id is malformed or uses zero
    """
    match = SEAT_ID_RE.match(seat_id.strip())
    if not match:
        raise InvalidSeatError(f"Invalid seat id: {seat_id!r}")
    row, seat = int(match.group(1)), int(match.group(2))
    if row < 1 or seat < 1:
        raise InvalidSeatError(f"Invalid seat id: {seat_id!r}")
    return row, seat


def row_letter(row: int) -> str:
    """
    Spreadsheet-style row letters: 1 -> "A", 26 -> "Z", 27 -> "AA".

    Example:
        >>> row_letter(3)
        'C'
    """
    letters = ""
    while row > 0:
        row, remainder = divmod(row - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def seat_label(seat_id: str) -> str:
    """Human-readable label for a seat id: "1-2" -> "A2"."""
    row, seat = parse_seat_id(seat_id)
    return f"{row_letter(row)}{seat}"


def sort_seat_ids(seat_ids) -> list[str]:
    """Sort seat ids by row then seat number."""
    return sorted(seat_ids, key=parse_seat_id)
