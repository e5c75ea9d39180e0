from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator, Tuple


WIDTH = 8
HEIGHT = 8
MASK64 = 0xFFFFFFFFFFFFFFFF

# Delta-swap constants for the main-diagonal flip
_K1 = 0x5500550055005500
_K2 = 0x3333000033330000
_K4 = 0x0F0F0F0F00000000

# Column guards for horizontal shifts, so cells don't wrap between rows
_NOT_FIRST_COLUMN = MASK64 ^ 0x0101010101010101
_NOT_LAST_COLUMN = MASK64 ^ 0x8080808080808080


def _bit(row: int, column: int) -> int:
    if not (0 <= row < HEIGHT and 0 <= column < WIDTH):
        raise ValueError(f"cell out of range: ({row}, {column})")
    return 1 << (row * WIDTH + column)


@dataclass(frozen=True, order=True)
class Mask:
    """An 8x8 bitboard of grid cells.

    Notes:
    - Bit 0 is the top-left cell; bits progress in reading order, so the
      index of ``(row, column)`` is ``row * 8 + column``.
    - Values are immutable; every operation returns a new ``Mask``.
    - Ordering compares the raw 64-bit pattern, which is what placement
      lists are sorted by.
    """

    bits: int = 0

    BLANK: ClassVar["Mask"]
    FULL: ClassVar["Mask"]
    FRAME: ClassVar["Mask"]

    def __post_init__(self) -> None:
        if not (0 <= self.bits <= MASK64):
            raise ValueError(f"mask outside 64 bits: {self.bits:#x}")

    @classmethod
    def from_cells(cls, cells: Iterable[Tuple[int, int]]) -> "Mask":
        bits = 0
        for row, column in cells:
            bits |= _bit(row, column)
        return cls(bits)

    @classmethod
    def for_month(cls, month: int) -> "Mask":
        """Mask with the cell for a zero-based month set.

        Args:
            month (int): Month index in range 0..11.

        Returns:
            Mask: Single cell; months 0-5 sit on row 0, months 6-11 on row 1.

        Raises:
            ValueError: If ``month`` is outside 0..11.
        """
        if not (0 <= month < 12):
            raise ValueError(f"invalid month index: {month}")
        index = month if month < 6 else month - 6 + WIDTH
        return cls(1 << index)

    @classmethod
    def for_day(cls, day: int) -> "Mask":
        """Mask with the cell for a zero-based day of the month set.

        Args:
            day (int): Day index in range 0..30.

        Returns:
            Mask: Single cell below the two month rows, wrapping every 7 days.

        Raises:
            ValueError: If ``day`` is outside 0..30.
        """
        if not (0 <= day < 31):
            raise ValueError(f"invalid day index: {day}")
        return cls(_bit(2 + day // 7, day % 7))

    def get(self, row: int, column: int) -> bool:
        return (self.bits & _bit(row, column)) != 0

    def set(self, row: int, column: int) -> "Mask":
        return Mask(self.bits | _bit(row, column))

    def clear(self, row: int, column: int) -> "Mask":
        return Mask(self.bits & ~_bit(row, column))

    def __and__(self, other: "Mask") -> "Mask":
        return Mask(self.bits & other.bits)

    def __or__(self, other: "Mask") -> "Mask":
        return Mask(self.bits | other.bits)

    def __sub__(self, other: "Mask") -> "Mask":
        return Mask(self.bits & ~other.bits)

    def __invert__(self) -> "Mask":
        return Mask(~self.bits & MASK64)

    def __bool__(self) -> bool:
        return self.bits != 0

    def is_empty(self) -> bool:
        return self.bits == 0

    def count(self) -> int:
        return self.bits.bit_count()

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(row, column)`` for every set cell in reading order."""
        bits = self.bits
        while bits:
            lsb = bits & -bits
            idx = lsb.bit_length() - 1
            yield divmod(idx, WIDTH)
            bits ^= lsb

    def regions(self) -> Iterator["Mask"]:
        """Split the set into its 4-connected regions.

        Each region is grown from its lowest cell by repeated one-step
        shifts until it stops changing.
        """
        rest = self.bits
        while rest:
            region = rest & -rest
            while True:
                grown = (
                    region
                    | ((region << 1) & _NOT_FIRST_COLUMN)
                    | ((region >> 1) & _NOT_LAST_COLUMN)
                    | (region << WIDTH)
                    | (region >> WIDTH)
                ) & rest
                if grown == region:
                    break
                region = grown
            yield Mask(region)
            rest &= ~region

    # --- Geometric transforms ---
    def translate(self, right: int, down: int) -> "Mask":
        """Shift every cell ``right`` columns and ``down`` rows.

        The caller guarantees no cell leaves the board; bits pushed past a
        row edge would wrap into the next row.
        """
        return Mask((self.bits << (down * WIDTH + right)) & MASK64)

    def flip_vertical(self) -> "Mask":
        """Mirror across the horizontal mid-line (row r <-> row 7 - r)."""
        return Mask(int.from_bytes(self.bits.to_bytes(8, "little"), "big"))

    def transpose(self) -> "Mask":
        """Mirror across the main diagonal (row <-> column).

        Three delta swaps exchange 4x4, then 2x2, then 1x1 blocks across the
        diagonal instead of moving cells one at a time.
        """
        x = self.bits
        t = _K4 & (x ^ (x << 28))
        x ^= t ^ (t >> 28)
        t = _K2 & (x ^ (x << 14))
        x ^= t ^ (t >> 14)
        t = _K1 & (x ^ (x << 7))
        x ^= t ^ (t >> 7)
        return Mask(x & MASK64)

    def rotate(self) -> "Mask":
        """Rotate the whole board 90 degrees clockwise."""
        return self.flip_vertical().transpose()

    # --- Display ---
    def to_grid(self, on: str = "#", off: str = "-") -> str:
        rows = []
        for r in range(HEIGHT):
            rows.append("".join(on if self.get(r, c) else off for c in range(WIDTH)))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Mask({self.bits:064b})"


Mask.BLANK = Mask(0)
Mask.FULL = Mask(MASK64)

# The board is 7x7-ish: the right and bottom edges are blocked off.
Mask.FRAME = Mask.from_cells(
    [
        (0, 6), (0, 7),
        (1, 6), (1, 7),
        (2, 7),
        (3, 7),
        (4, 7),
        (5, 7),
        (6, 3), (6, 4), (6, 5), (6, 6), (6, 7),
        (7, 0), (7, 1), (7, 2), (7, 3), (7, 4), (7, 5), (7, 6), (7, 7),
    ]
)
