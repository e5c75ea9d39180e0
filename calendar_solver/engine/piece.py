from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple

from .mask import HEIGHT, WIDTH, Mask


class Piece(IntEnum):
    """Each type of piece that fits on the board.

    Pieces are loosely named after letters they resemble; GAMMA and LAMEDH
    borrow from the Greek and Hebrew alphabets. The enum order is the order
    the solver places pieces in.
    """

    C = 0
    GAMMA = 1
    L = 2
    LAMEDH = 3
    O = 4  # noqa: E741
    P = 5
    T = 6
    Z = 7

    @property
    def base_mask(self) -> Mask:
        """The piece shape anchored at the top-left of the board."""
        return Mask.from_cells(_SHAPES[self])

    @property
    def size(self) -> Tuple[int, int]:
        """Bounding box of ``base_mask`` as ``(width, height)``.

        Bounds how far the piece can be translated before leaving the board.
        """
        return _SIZES[self]

    @property
    def is_chiral(self) -> bool:
        """True if the mirror image cannot be reached by rotation alone.

        Chiral pieces need their flipped orientations enumerated as well.
        """
        return self not in (Piece.C, Piece.GAMMA, Piece.O)

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def cell_count(self) -> int:
        return len(_SHAPES[self])

    def calculate_positions(self) -> List[Mask]:
        """Every distinct placement of the piece inside the 8x8 board.

        Returns:
            List[Mask]: Sorted by bit pattern, duplicates removed.

        Notes:
            Rotating or transposing the whole board maps on-board placements
            to on-board placements, so rotating each translation covers every
            offset of every orientation. Transposing a rotation yields a
            reflection, which chiral pieces need.
        """
        positions: List[Mask] = []
        width, height = self.size
        base = self.base_mask

        for right in range(WIDTH - width + 1):
            for down in range(HEIGHT - height + 1):
                translated = base.translate(right, down)
                for i in range(4):
                    positions.append(translated)
                    if self.is_chiral:
                        positions.append(translated.transpose())
                    if i < 3:
                        translated = translated.rotate()

        # Ascending bit order pushes top-of-board placements first, which
        # hits collisions early in the search.
        positions.sort()
        deduped: List[Mask] = []
        for m in positions:
            if not deduped or deduped[-1] != m:
                deduped.append(m)
        return deduped

    def __str__(self) -> str:
        return self.glyph


# Placement order used by the solver; ALL_PIECES[piece] == piece
ALL_PIECES: Tuple[Piece, ...] = tuple(Piece)
PIECE_COUNT = len(ALL_PIECES)


_SHAPES: Dict[Piece, Tuple[Tuple[int, int], ...]] = {
    # •••
    # •-•
    Piece.C: ((0, 0), (0, 1), (0, 2), (1, 0), (1, 2)),
    # •••
    # •--
    # •--
    Piece.GAMMA: ((0, 0), (0, 1), (0, 2), (1, 0), (2, 0)),
    # •-
    # •-
    # •-
    # ••
    Piece.L: ((0, 0), (1, 0), (2, 0), (3, 0), (3, 1)),
    # •-
    # •-
    # ••
    # -•
    Piece.LAMEDH: ((0, 0), (1, 0), (2, 0), (2, 1), (3, 1)),
    # •••
    # •••
    Piece.O: ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)),
    # •••
    # ••-
    Piece.P: ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1)),
    # •-
    # •-
    # ••
    # •-
    Piece.T: ((0, 0), (1, 0), (2, 0), (2, 1), (3, 0)),
    # ••-
    # -•-
    # -••
    Piece.Z: ((0, 0), (0, 1), (1, 1), (2, 1), (2, 2)),
}

# If you change a shape, update its size here too.
_SIZES: Dict[Piece, Tuple[int, int]] = {
    Piece.C: (3, 2),
    Piece.GAMMA: (3, 3),
    Piece.L: (2, 4),
    Piece.LAMEDH: (2, 4),
    Piece.O: (3, 2),
    Piece.P: (3, 2),
    Piece.T: (2, 4),
    Piece.Z: (3, 3),
}

_GLYPHS: Dict[Piece, str] = {
    Piece.C: "C",
    Piece.GAMMA: "Γ",
    Piece.L: "L",
    Piece.LAMEDH: "ל",
    Piece.O: "O",
    Piece.P: "P",
    Piece.T: "T",
    Piece.Z: "Z",
}


class PlacementTable:
    """Placement lists for every piece, computed once.

    Layout:
    - positions[piece]: tuple of Masks in ascending bit order

    Read-only after construction, so one table can back any number of games.
    """

    def __init__(self) -> None:
        self._positions: Tuple[Tuple[Mask, ...], ...] = tuple(
            tuple(piece.calculate_positions()) for piece in ALL_PIECES
        )

    def positions(self, piece: Piece) -> Tuple[Mask, ...]:
        return self._positions[piece]

    def __len__(self) -> int:
        return sum(len(p) for p in self._positions)


# Shared table, built at import
PLACEMENTS = PlacementTable()
