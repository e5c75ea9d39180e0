from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI
from pydantic import BaseModel, Field

from .error import EXCEPTION_HANDLERS
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.dates import date_indices, parse_date, today
from ...engine.piece import ALL_PIECES, PLACEMENTS
from ...search.service import SolveResult, SolveService


logger = logging.getLogger(__name__)


class SolveRequest(BaseModel):
    date: Optional[str] = Field(default=None, description="YYYY-MM-DD, defaults to today")
    prune: bool = Field(default=True, description="skip branches with unfillable regions")


class SolveResponse(BaseModel):
    date: str
    month0: int
    day0: int
    outcome: str
    solved: bool
    board: List[str]
    pieces: Dict[str, List[List[int]]]
    nodes: int
    time_ms: int


class PieceInfo(BaseModel):
    name: str
    glyph: str
    chiral: bool
    width: int
    height: int
    cells: List[List[int]]
    placements: int


def create_app() -> FastAPI:
    app = FastAPI(title="Calendar Puzzle Solver API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    service = SolveService(PLACEMENTS)

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/pieces", response_model=List[PieceInfo])
    async def pieces() -> List[PieceInfo]:
        out: List[PieceInfo] = []
        for p in ALL_PIECES:
            width, height = p.size
            out.append(
                PieceInfo(
                    name=p.name,
                    glyph=p.glyph,
                    chiral=p.is_chiral,
                    width=width,
                    height=height,
                    cells=[[r, c] for r, c in p.base_mask.cells()],
                    placements=len(PLACEMENTS.positions(p)),
                )
            )
        return out

    # Sync handlers run in the threadpool
    @app.post("/api/solve", response_model=SolveResponse)
    def solve(req: SolveRequest) -> SolveResponse:
        day = parse_date(req.date) if req.date else today()
        return _solve_response(service, day, prune=req.prune)

    @app.get("/api/solve/{date}", response_model=SolveResponse)
    def solve_for(date: str) -> SolveResponse:
        return _solve_response(service, parse_date(date), prune=True)

    return app


def _solve_response(service: SolveService, day: dt.date, *, prune: bool) -> SolveResponse:
    res: SolveResult = service.solve_date(day, prune=prune)
    month0, day0 = date_indices(day)
    return SolveResponse(
        date=day.isoformat(),
        month0=month0,
        day0=day0,
        outcome=res.outcome.value,
        solved=res.solved,
        board=res.game.render().splitlines(),
        pieces={p.name: [[r, c] for r, c in cells] for p, cells in res.game.placements().items()},
        nodes=res.nodes,
        time_ms=res.time_ms,
    )


# Default app for non-factory servers
app = create_app()
