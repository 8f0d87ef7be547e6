"""
Interactive play.

Console front-end of the game: two humans sharing a terminal, or a human
against the fittest agent of a checkpoint. Input and output go through
injectable callables so that the loops can be driven without a terminal.
"""

from typing import Callable

from fourai.game   import Board, Spot, NUM_COLUMNS, NUM_ROWS
from fourai.pool   import Agent, CheckpointStore

RESET  = "\x1b[0m"
BOLD   = "\x1b[1m"
RED    = "\x1b[31m"
YELLOW = "\x1b[33m"

COLOR_NAMES = {Spot.FIRST: "RED", Spot.SECOND: "YELLOW"}

def render_board(board: Board, color: bool = True) -> str:
    """
    Draw the board as text, column numbers on top.

    Parameters:
        board: the board to draw
        color: if True, pieces are drawn as ANSI-coloured blocks;
               otherwise as 'X' (first player) and 'O' (second player)
    """
    if color:
        cells = {Spot.EMPTY: "  ", Spot.FIRST: f"{RED}██{RESET}", Spot.SECOND: f"{YELLOW}██{RESET}"}
    else:
        cells = {Spot.EMPTY: "  ", Spot.FIRST: "XX", Spot.SECOND: "OO"}

    width = NUM_COLUMNS * 5 - 1
    lines = ["  " + "    ".join(str(c + 1) for c in range(NUM_COLUMNS))]
    lines.append("┏" + "".join("┳" if (x + 1) % 5 == 0 else "━" for x in range(width)) + "┓")
    for row in range(NUM_ROWS):
        lines.append("┃ " + " ┃ ".join(cells[board.get(c, row)] for c in range(NUM_COLUMNS)) + " ┃")
    lines.append("┗" + "".join("┻" if (x + 1) % 5 == 0 else "━" for x in range(width)) + "┛")
    return "\n".join(lines)

def describe(spot: Spot, color: bool = True) -> str:
    name = COLOR_NAMES[spot]
    if not color:
        return name
    return f"{BOLD}{RED if spot is Spot.FIRST else YELLOW}{name}{RESET}"

def load_agent(prefix: str, generation: int | None = None) -> tuple[int, Agent]:
    """
    Load the fittest agent of a checkpoint.

    Parameters:
        prefix:     checkpoint path prefix
        generation: generation to load; None for the newest checkpoint

    Returns:
        (generation, agent)
    """
    generation, agents = CheckpointStore(prefix).load(generation)
    return generation, max(agents, key=lambda agent: agent.fitness)

def _read_column(input_fn: Callable[[str], str]) -> int | None:
    """
    Ask for a column number between 1 and 7; returns the 0-based column, or None for invalid input.
    """
    raw = input_fn(f"Enter your move (between 1-{NUM_COLUMNS}): ").strip()
    if not raw.isdigit() or not 1 <= int(raw) <= NUM_COLUMNS:
        return None
    return int(raw) - 1

def _human_move(board: Board, current: Spot, input_fn, output_fn):
    """
    Prompt until the human makes a legal move; returns its InsertResult.
    """
    while True:
        column = _read_column(input_fn)
        if column is None:
            output_fn(f"Invalid input! Please enter a number between 1-{NUM_COLUMNS}.")
            continue
        if board.column_full(column):
            output_fn("That column is full. Try again!")
            continue
        return board.insert(column, current)

def _announce(board: Board, winner: Spot, output_fn, color: bool):
    output_fn(render_board(board, color))
    if winner is Spot.EMPTY:
        output_fn("It's a draw!")
    else:
        output_fn(f"{describe(winner, color)} wins!")

def play_local(input_fn: Callable[[str], str] = input,
               output_fn: Callable[[str], None] = print,
               color: bool = True) -> Spot:
    """
    Two humans play on the same console.

    Returns:
        the winner, or Spot.EMPTY for a draw
    """
    board   = Board()
    current = Spot.FIRST

    while True:
        output_fn(render_board(board, color))
        output_fn(f"It's {describe(current, color)}'s turn!")
        result = _human_move(board, current, input_fn, output_fn)
        if result.is_terminal:
            _announce(board, result.winner, output_fn, color)
            return result.winner
        current = current.opponent

def play_against_ai(prefix: str,
                    ai_first: bool = False,
                    generation: int | None = None,
                    input_fn: Callable[[str], str] = input,
                    output_fn: Callable[[str], None] = print,
                    color: bool = True) -> Spot:
    """
    A human plays against the fittest agent of a checkpoint.

    Parameters:
        prefix:     checkpoint path prefix
        ai_first:   if True the agent plays first (RED)
        generation: generation to load; None for the newest checkpoint

    Returns:
        the winner, or Spot.EMPTY for a draw

    Raises:
        CheckpointError: if the checkpoint cannot be loaded
    """
    generation, agent = load_agent(prefix, generation)
    output_fn(f"Playing against the fittest agent of generation {generation}")

    ai_color = Spot.FIRST if ai_first else Spot.SECOND
    board    = Board()
    current  = Spot.FIRST

    while True:
        output_fn(render_board(board, color))
        output_fn(f"It's {describe(current, color)}'s turn!")
        if current is ai_color:
            result = agent.player.play_move(board, current)
        else:
            result = _human_move(board, current, input_fn, output_fn)

        if result.is_terminal:
            _announce(board, result.winner, output_fn, color)
            return result.winner
        current = current.opponent
