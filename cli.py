from __future__ import annotations

from typing import List, Optional

from engine import (
    WASTE,
    GameConfig,
    GameState,
    GridBoard,
    LinearBoard,
    Position,
    PyramidBoard,
    activate,
    draw_from_stock,
    find_hint,
    new_game,
)


# Defaults for a console session
GRID_SIZE: int = 5
SUITOR_RULE: bool = False
SCORE_PER_MOVE: int = 10
SEED: Optional[int] = None

GAMES = {"1": "linear", "2": "grid", "3": "pyramid"}


def ask_game() -> GameConfig:
    print("Games: 1) Royal Marriage  2) Meeting in the Garden  3) Pyramid")
    while True:
        s = input("Pick a game (1-3): ").strip()
        if s in GAMES:
            break
        print("Please type 1, 2 or 3.")
    kind = GAMES[s]
    size = GRID_SIZE
    suitor = SUITOR_RULE
    if kind == "grid":
        sz = input(f"Grid size 5 or 6 [{GRID_SIZE}]: ").strip()
        if sz in ("5", "6"):
            size = int(sz)
        suitor = input("Suitor rule? (y/N): ").strip().lower() == "y"
    return GameConfig(kind=kind, grid_size=size, suitor_rule=suitor, score_per_move=SCORE_PER_MOVE, seed=SEED)  # type: ignore[arg-type]


def cell_text(state: GameState, pos: Position) -> str:
    board = state.board
    card = board.card_at(pos)
    if card is None:
        return ".."
    if isinstance(board, PyramidBoard) and board.is_covered(pos):
        return "##"
    txt = str(card)
    if card.is_anchor:
        txt += "*"
    if state.selection is not None and state.selection.position == pos:
        txt = f"[{txt}]"
    return txt


def print_board(state: GameState) -> None:
    board = state.board
    if isinstance(board, LinearBoard):
        parts: List[str] = []
        for i in range(len(board.cells)):
            if board.cells[i] is None:
                continue
            parts.append(f"{i}:{cell_text(state, i)}")
        # wrap long rows
        for k in range(0, len(parts), 10):
            print("  ".join(parts[k:k + 10]))
    elif isinstance(board, GridBoard):
        for r in range(board.size):
            print(" ".join(f"{cell_text(state, (r, c)):>6}" for c in range(board.size)))
    elif isinstance(board, PyramidBoard):
        for r in range(board.rows):
            pad = " " * (3 * (board.rows - r - 1))
            print(pad + " ".join(f"{cell_text(state, (r, c)):>5}" for c in range(r + 1)))
        top = board.waste[-1] if board.waste else None
        print(f"Stock: {len(board.stock)}  Waste: {cell_text(state, WASTE) if top else '(empty)'}")
    print(f"Moves: {state.moves}  Score: {state.score}")
    print()


def drain_logs(state: GameState) -> None:
    for line in state.logs:
        print(line)
    state.logs.clear()


def parse_position(s: str) -> Optional[Position]:
    parts = s.split()
    if parts == ["w"]:
        return WASTE
    try:
        nums = [int(p) for p in parts]
    except ValueError:
        return None
    if len(nums) == 1:
        return nums[0]
    if len(nums) == 2:
        return (nums[0], nums[1])
    return None


def play(state: GameState) -> bool:
    """Run one session; returns True when the player asked for a new game."""
    while True:
        print_board(state)
        if state.is_over:
            if state.status == "won" and state.cfg.kind != "pyramid":
                print("The King and Queen are united!")
            print(f"Game over: {state.status}. Moves: {state.moves}  Score: {state.score}")
            return input("New game? (y/N): ").strip().lower() == "y"
        s = input("Position (i | r c | w), d=draw, h=hint, n=new, q=quit: ").strip().lower()
        if s == "q":
            return False
        if s == "n":
            return True
        if s == "h":
            hint = find_hint(state)
            print("No moves left." if hint is None else f"Hint: {hint.kind} {hint.positions}")
            continue
        if s == "d":
            res = draw_from_stock(state)
            if res.kind == "ignored":
                print("Nothing to draw.")
            drain_logs(state)
            continue
        pos = parse_position(s)
        if pos is None:
            print("Could not read that position.")
            continue
        res = activate(state, pos)
        if res.kind == "ignored":
            print("That card cannot be picked.")
        drain_logs(state)


def main() -> None:
    print("Royal Solitaires - Console")
    while True:
        cfg = ask_game()
        state = new_game(cfg)
        drain_logs(state)
        if not play(state):
            break


if __name__ == "__main__":
    main()
