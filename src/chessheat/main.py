import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from chessheat.config import Settings
from chessheat.constants import parse_square_name, piece_code
from chessheat.influence import compute_influence
from chessheat.position import Board, PlacementError, decode_placement
from chessheat.report import describe_square, insight_payload

logger = logging.getLogger(__name__)

settings = Settings()

app = FastAPI(title="Chess Heat")


# --- Request/Response models ---

class HeatmapRequest(BaseModel):
    fen: str


class SquareRequest(BaseModel):
    fen: str
    square: str


# --- Helpers ---

def _decode(fen: str) -> Board:
    try:
        return decode_placement(fen, strict=settings.strict_placement)
    except PlacementError as e:
        logger.warning("Rejected FEN %s: %s", fen, e)
        raise HTTPException(status_code=400, detail=str(e)) from e


def _board_codes(board: Board) -> list[list[str | None]]:
    return [
        [piece_code(p) if p is not None else None for p in row]
        for row in board.rows
    ]


# --- Endpoints ---

@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/heatmap")
async def heatmap(req: HeatmapRequest):
    board = _decode(req.fen)
    data = compute_influence(board)
    return {
        "placement": board.placement(),
        "board": _board_codes(board),
        "max_abs": data.max_abs(),
        **data.to_dict(),
    }


@app.post("/api/heatmap/square")
async def heatmap_square(req: SquareRequest):
    board = _decode(req.fen)
    try:
        row, col = parse_square_name(req.square)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid square: {req.square}") from e
    data = compute_influence(board)
    return {
        "square": req.square.strip().lower(),
        "net": data.net[row][col],
        "description": describe_square(board, data, row, col),
        **data.at(row, col).to_dict(),
    }


@app.post("/api/insights/payload")
async def insights_payload(req: HeatmapRequest):
    board = _decode(req.fen)
    return insight_payload(compute_influence(board))
