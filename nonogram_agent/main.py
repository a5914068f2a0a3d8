"""
Nonogram Agent

Console nonogram game: an AI draws a small pixel art picture and you
recover it from the row and column clues.
"""

import asyncio
import logging
from typing import List

from dotenv import load_dotenv

from .config import DEFAULT_DIFFICULTY, MAX_GRID_SIZE, MIN_GRID_SIZE, Settings, configure_logging
from .errors import GameStateError, GenerationExhausted
from .generator import PixelArtGenerator
from .providers import create_provider
from .session import GameSession
from .utils.yaml_generator import create_puzzle_yaml

logger = logging.getLogger(__name__)

HELP_TEXT = f"""
Commands:
  new [ROWS COLS [DIFFICULTY]] - Generate a new puzzle ({MIN_GRID_SIZE}-{MAX_GRID_SIZE} cells per side, difficulty 1-5)
  t ROW COL                    - Toggle a cell (0-based)
  check                        - Check your solution
  errors                       - Highlight rows/columns with mistakes
  show                         - Show the solution
  board                        - Print the board
  export                       - Print the puzzle as YAML
  help                         - Show this help message
  exit                         - Quit the application
"""


def render_board(session: GameSession) -> str:
    """Render clues and player grid as text, marking highlighted lines with '!'."""
    error_rows = session.error_report.rows if session.error_report else set()
    error_cols = session.error_report.cols if session.error_report else set()
    revealed = {(p.row, p.col) for p in session.reveal.colors} if session.reveal else set()

    row_labels = [" ".join(str(n) for n in hints) for hints in session.hints.row_hints]
    label_width = max(len(label) for label in row_labels) + 2
    col_depth = max(len(hints) for hints in session.hints.col_hints)

    lines: List[str] = []
    for depth in range(col_depth):
        cells = []
        for hints in session.hints.col_hints:
            offset = depth - (col_depth - len(hints))
            cells.append(f"{hints[offset]:>2}" if offset >= 0 else "  ")
        lines.append(" " * label_width + " " + "".join(cells))

    marks = "".join(" !" if c in error_cols else "  " for c in range(session.cols))
    if error_cols:
        lines.append(" " * label_width + " " + marks)

    for r in range(session.rows):
        prefix = "!" if r in error_rows else " "
        cells = []
        for c in range(session.cols):
            if (r, c) in revealed:
                cells.append(" █")
            else:
                cells.append(" ■" if session.player[r, c] else " ·")
        lines.append(f"{prefix}{row_labels[r]:>{label_width - 1}} " + "".join(cells))

    return "\n".join(lines)


async def handle_command(
    command: str,
    args: List[str],
    session: GameSession,
    generator: PixelArtGenerator,
) -> None:
    """Run one console command against the session."""
    if command == "new":
        if len(args) not in (0, 2, 3):
            print("Usage: new [ROWS COLS [DIFFICULTY]]")
            return
        numbers = [int(a) for a in args]
        rows, cols = (numbers[0], numbers[1]) if len(numbers) >= 2 else (10, 10)
        difficulty = numbers[2] if len(numbers) >= 3 else DEFAULT_DIFFICULTY
        print("Generating...")
        try:
            await session.new_game(generator, rows, cols, difficulty)
        except GenerationExhausted as e:
            logger.error(f"Error generating pixel art: {e}")
            print("❌ Error generating pixel art. Please try again.")
            return
        print(render_board(session))

    elif command == "t":
        if len(args) != 2:
            print("Usage: t ROW COL")
            return
        session.toggle(int(args[0]), int(args[1]))
        print(render_board(session))

    elif command == "check":
        result = session.check()
        if result.solved:
            print("🎉 Congratulations! The solution is correct!")
            print(render_board(session))
            print(f"\n{result.reveal.description}")
        else:
            print("The solution is incorrect. Keep trying!")

    elif command == "errors":
        report = session.highlight_errors()
        if report.has_errors:
            print(render_board(session))
        else:
            print("✓ No errors found!")

    elif command == "show":
        reveal = session.show_solution()
        print(render_board(session))
        print(f"\n{reveal.description}")

    elif command == "board":
        if session.has_puzzle:
            print(render_board(session))
        else:
            print("No puzzle yet. Type 'new' to generate one.")

    elif command == "export":
        if not session.has_puzzle:
            print("No puzzle yet. Type 'new' to generate one.")
            return
        print(create_puzzle_yaml(
            session.rows, session.cols, session.difficulty, session.description, session.pixels
        ))

    else:
        print(f"Unknown command: {command}. Type 'help' for usage instructions.")


async def main():
    """Main application entry point."""
    print("🧩 Nonogram Agent")
    print("=" * 50)
    print()

    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    # Check API key
    if settings.provider == "anthropic" and not settings.api_key:
        print("❌ Error: ANTHROPIC_API_KEY not found in environment")
        print("Please create a .env file with your API key:")
        print("ANTHROPIC_API_KEY=your_api_key_here")
        return

    generator = PixelArtGenerator(create_provider(settings), max_attempts=settings.max_attempts)
    session = GameSession()

    print("Type 'new' to generate a puzzle, 'help' for usage instructions, 'exit' to quit")
    print()

    while True:
        user_input = input("> ").strip()
        if not user_input:
            continue

        command, *args = user_input.split()
        command = command.lower()

        if command == "exit":
            print("\nGoodbye!")
            break

        if command == "help":
            print(HELP_TEXT)
            continue

        try:
            await handle_command(command, args, session, generator)
        except (GameStateError, ValueError) as e:
            print(f"⚠️  {e}")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user. Goodbye!")


if __name__ == "__main__":
    run()
