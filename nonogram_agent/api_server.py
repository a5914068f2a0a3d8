"""
FastAPI server for the nonogram game.

This module exposes one game session over HTTP so a browser or desktop
frontend can generate puzzles, toggle cells, check the board and reveal the
picture.
"""

import logging
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_DIFFICULTY,
    MAX_DIFFICULTY,
    MAX_GRID_SIZE,
    MIN_DIFFICULTY,
    MIN_GRID_SIZE,
    Settings,
    get_fill_percentage,
)
from .errors import GameStateError, GenerationExhausted
from .generator import PixelArtGenerator
from .providers import create_provider
from .session import GameSession, Reveal
from .utils.yaml_generator import create_puzzle_yaml

logger = logging.getLogger(__name__)

load_dotenv()

GENERATION_FAILED_MESSAGE = "Error generating pixel art. Please try again."


# =============================================================================
# Pydantic Models for Requests
# =============================================================================

class GenerateRequest(BaseModel):
    """Request model for a new puzzle."""
    rows: int = Field(default=10, ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE, description="Grid height")
    cols: int = Field(default=10, ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE, description="Grid width")
    difficulty: int = Field(
        default=DEFAULT_DIFFICULTY, ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY,
        description="Difficulty level (1 = dense and easy, 5 = sparse and hard)"
    )


class ToggleRequest(BaseModel):
    """Request model for flipping one cell."""
    row: int = Field(ge=0, description="Row index")
    col: int = Field(ge=0, description="Column index")


# =============================================================================
# Pydantic Models for Responses
# =============================================================================

class CellColor(BaseModel):
    row: int
    col: int
    color: str


class BoardResponse(BaseModel):
    """Layout and clues of a freshly generated board."""
    rows: int
    cols: int
    difficulty: int
    fill_percentage: float
    row_hints: List[List[int]]
    col_hints: List[List[int]]


class ToggleResponse(BaseModel):
    row: int
    col: int
    filled: bool


class RevealResponse(BaseModel):
    """Solution colors and description."""
    colors: List[CellColor] = Field(default_factory=list)
    description: str = ""


class CheckResponse(BaseModel):
    """Check outcome, carrying the revealed picture when solved."""
    solved: bool
    message: str
    colors: Optional[List[CellColor]] = None
    description: Optional[str] = None


class ErrorsResponse(BaseModel):
    has_errors: bool
    error_rows: List[int] = Field(default_factory=list)
    error_cols: List[int] = Field(default_factory=list)
    message: str


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Nonogram Agent API",
    description="API for AI generated nonogram puzzles",
    version="1.0.0",
)

# Configure CORS for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.session = GameSession()
app.state.generator = None


def get_session() -> GameSession:
    return app.state.session


def get_generator() -> PixelArtGenerator:
    """
    Create the generator on first use from environment settings.

    Raises 503 with the configuration problem when the settings are unusable.
    """
    if app.state.generator is None:
        try:
            settings = Settings.from_env()
            if settings.provider == "anthropic" and not settings.api_key:
                raise ValueError("ANTHROPIC_API_KEY environment variable not set")
        except ValueError as e:
            logger.error(f"Invalid generator configuration: {e}")
            raise HTTPException(status_code=503, detail=f"Generator is not configured: {e}")
        app.state.generator = PixelArtGenerator(
            create_provider(settings), max_attempts=settings.max_attempts
        )
    return app.state.generator


def _reveal_response(reveal: Reveal) -> RevealResponse:
    return RevealResponse(
        colors=[CellColor(row=p.row, col=p.col, color=p.color) for p in reveal.colors],
        description=reveal.description,
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for service monitoring."""
    return {"status": "healthy", "service": "nonogram-agent"}


# =============================================================================
# Game Endpoints
# =============================================================================

@app.post("/generate", response_model=BoardResponse)
async def generate_board(
    request: GenerateRequest,
    session: GameSession = Depends(get_session),
    generator: PixelArtGenerator = Depends(get_generator),
) -> BoardResponse:
    """
    Generate a new puzzle and start a game with it.

    Returns 409 while another generation is running and 503 when the
    generator gives up.
    """
    try:
        await session.new_game(generator, request.rows, request.cols, request.difficulty)
    except GameStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationExhausted as e:
        logger.error(f"Error generating pixel art: {e}")
        raise HTTPException(status_code=503, detail=GENERATION_FAILED_MESSAGE)

    return BoardResponse(
        rows=session.rows,
        cols=session.cols,
        difficulty=session.difficulty,
        fill_percentage=get_fill_percentage(session.difficulty),
        row_hints=session.hints.row_hints,
        col_hints=session.hints.col_hints,
    )


@app.get("/board")
async def get_board(session: GameSession = Depends(get_session)):
    """Current board state for rendering."""
    return session.board_state()


@app.post("/toggle", response_model=ToggleResponse)
async def toggle_cell(request: ToggleRequest, session: GameSession = Depends(get_session)) -> ToggleResponse:
    try:
        filled = session.toggle(request.row, request.col)
    except GameStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ToggleResponse(row=request.row, col=request.col, filled=filled)


@app.post("/check", response_model=CheckResponse)
async def check_solution(session: GameSession = Depends(get_session)) -> CheckResponse:
    try:
        result = session.check()
    except GameStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result.solved:
        reveal = _reveal_response(result.reveal)
        return CheckResponse(
            solved=True,
            message="Congratulations! The solution is correct!",
            colors=reveal.colors,
            description=reveal.description,
        )
    return CheckResponse(solved=False, message="The solution is incorrect. Keep trying!")


@app.post("/highlight-errors", response_model=ErrorsResponse)
async def highlight_errors(session: GameSession = Depends(get_session)) -> ErrorsResponse:
    try:
        report = session.highlight_errors()
    except GameStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ErrorsResponse(
        has_errors=report.has_errors,
        error_rows=sorted(report.rows),
        error_cols=sorted(report.cols),
        message="Check the highlighted clues." if report.has_errors else "No errors found!",
    )


@app.post("/show-solution", response_model=RevealResponse)
async def show_solution(session: GameSession = Depends(get_session)) -> RevealResponse:
    try:
        reveal = session.show_solution()
    except GameStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _reveal_response(reveal)


@app.get("/export", response_class=PlainTextResponse)
async def export_puzzle(session: GameSession = Depends(get_session)) -> str:
    """Current puzzle as a YAML document."""
    if not session.has_puzzle:
        raise HTTPException(status_code=409, detail="No puzzle has been generated yet")
    return create_puzzle_yaml(
        session.rows, session.cols, session.difficulty, session.description, session.pixels
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
