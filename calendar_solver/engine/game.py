from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .mask import HEIGHT, WIDTH, Mask
from .piece import ALL_PIECES, PIECE_COUNT, PLACEMENTS, Piece, PlacementTable


logger = logging.getLogger(__name__)


FRAME_DISPLAY = "#"
DATE_DISPLAY = "•"
BLANK_DISPLAY = "-"


class Outcome(str, Enum):
    PENDING = "pending"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


def _region_sizes(pieces: Tuple[Piece, ...]) -> FrozenSet[int]:
    # Every area that some subset of `pieces` could tile exactly
    sums = {0}
    for p in pieces:
        sums |= {s + p.cell_count for s in sums}
    return frozenset(sums)


# Indexed by cursor: cells the unplaced pieces cover, and region sizes they can fill
_REMAINING_CELLS: Tuple[int, ...] = tuple(
    sum(p.cell_count for p in ALL_PIECES[i:]) for i in range(PIECE_COUNT + 1)
)
_FILLABLE: Tuple[FrozenSet[int], ...] = tuple(
    _region_sizes(ALL_PIECES[i:]) for i in range(PIECE_COUNT + 1)
)


@dataclass
class Game:
    """Search state for one date.

    Responsibility: track blocked cells and placed pieces, and run the
    backtracking search that fills the board.

    Notes:
    - ``occupied`` is always ``frame | date | placed[0] | ... | placed[7]``
      and none of those masks share a bit.
    - An empty mask in ``placed`` means that piece is not on the board.
    - ``cursor`` is the index of the next piece to try, in ``ALL_PIECES``
      order.
    """

    frame: Mask
    date: Mask
    table: PlacementTable = field(default=PLACEMENTS, repr=False)
    prune: bool = True
    placed: List[Mask] = field(default_factory=lambda: [Mask.BLANK] * PIECE_COUNT)
    occupied: Mask = field(init=False)
    cursor: int = 0
    nodes: int = 0
    outcome: Outcome = Outcome.PENDING
    _candidates: Tuple[Tuple[Mask, ...], ...] = field(init=False, repr=False)

    @classmethod
    def for_date(
        cls,
        month: int,
        day: int,
        table: PlacementTable = PLACEMENTS,
        prune: bool = True,
    ) -> "Game":
        """Create an empty game with the cells for a date blocked.

        Args:
            month (int): Zero-based month, 0..11.
            day (int): Zero-based day of month, 0..30. Whether the day exists
                in that month is the caller's concern.
            table (PlacementTable): Placement lists to search over.
            prune (bool): Skip branches that leave an unfillable region.

        Returns:
            Game: Game with no pieces placed and ``cursor == 0``.

        Raises:
            ValueError: If ``month`` or ``day`` is out of range.
        """
        date = Mask.for_month(month) | Mask.for_day(day)
        return cls(frame=Mask.FRAME, date=date, table=table, prune=prune)

    def __post_init__(self) -> None:
        if len(self.placed) != PIECE_COUNT:
            raise ValueError(f"expected {PIECE_COUNT} piece masks")
        self.placed = list(self.placed)
        occupied = Mask.BLANK
        for m in [self.frame, self.date] + self.placed:
            if m.bits & occupied.bits:
                raise ValueError(f"overlapping masks: {m!r}")
            occupied = occupied | m
        self.occupied = occupied
        # Drop placements that hit the frame or date once, up front
        blocked = self.frame | self.date
        self._candidates = tuple(
            tuple(m for m in self.table.positions(p) if (m & blocked).is_empty())
            for p in ALL_PIECES
        )

    # --- Placement ---
    def place(self, piece: Piece, candidate: Mask) -> bool:
        """Put ``piece`` on the board at ``candidate`` if every cell is free.

        Returns:
            bool: ``True`` if placed. On ``False`` the game is unchanged.
        """
        if candidate.bits & self.occupied.bits:
            return False
        self.placed[piece] = candidate
        self.occupied = self.occupied | candidate
        return True

    def remove(self, piece: Piece) -> None:
        self.occupied = self.occupied - self.placed[piece]
        self.placed[piece] = Mask.BLANK

    # --- Search ---
    def solve(self) -> Outcome:
        """Fill the board by depth-first search and report how it ended.

        Returns:
            Outcome: ``SOLVED`` with the first solution left on the board,
                or ``EXHAUSTED`` if no arrangement of the remaining pieces
                fits. Calling again returns the recorded outcome.
        """
        if self.outcome is not Outcome.PENDING:
            return self.outcome
        if self._search():
            self.outcome = Outcome.SOLVED
        else:
            self.outcome = Outcome.EXHAUSTED
            logger.debug(
                "search exhausted after %d nodes\n%s", self.nodes, self.occupied.to_grid()
            )
        return self.outcome

    def _search(self) -> bool:
        if self.cursor == PIECE_COUNT:
            return self.is_solved()

        piece = ALL_PIECES[self.cursor]
        self.cursor += 1
        for candidate in self._candidates[piece]:
            self.nodes += 1
            if not self.place(piece, candidate):
                continue
            if not (self.prune and self._is_dead_end()):
                if self._search():
                    return True
            self.remove(piece)

        self.cursor -= 1
        return False

    def _is_dead_end(self) -> bool:
        free = self.free()
        if free.count() != _REMAINING_CELLS[self.cursor]:
            return True
        fillable = _FILLABLE[self.cursor]
        for region in free.regions():
            if region.count() not in fillable:
                return True
        return False

    # --- State queries ---
    def free(self) -> Mask:
        """Cells not yet covered by the frame, the date or any piece."""
        return ~self.occupied

    def is_solved(self) -> bool:
        return self.occupied == Mask.FULL

    def piece_at(self, row: int, column: int) -> Optional[Piece]:
        for piece in ALL_PIECES:
            if self.placed[piece].get(row, column):
                return piece
        return None

    def placements(self) -> Dict[Piece, List[Tuple[int, int]]]:
        """Cells covered by each placed piece, in reading order."""
        return {p: list(self.placed[p].cells()) for p in ALL_PIECES if self.placed[p]}

    # --- Display ---
    def render(self) -> str:
        """Draw the board, one line per row.

        A cell shows the frame first, then the date, then the covering
        piece's glyph, else a blank marker.
        """
        lines: List[str] = []
        for r in range(HEIGHT):
            row: List[str] = []
            for c in range(WIDTH):
                if self.frame.get(r, c):
                    row.append(FRAME_DISPLAY)
                elif self.date.get(r, c):
                    row.append(DATE_DISPLAY)
                else:
                    piece = self.piece_at(r, c)
                    row.append(piece.glyph if piece is not None else BLANK_DISPLAY)
            lines.append("".join(row))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
