"""
Game basics: board representation, rules, winner/draw checks, validity.
Teaching notes:
- State is a tuple of 9 cells: 0=empty, 1=P1 (X), 2=P2 (O). P1 always starts.
- A "ply" is a half-move; the move path of a game is the list of cell indices played.
- Valid states have counts either equal (P1 to move) or P1 has one more (P2 to move).
"""
from typing import List, Optional, Sequence, Tuple

P1 = 1
P2 = 2

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6],
]

EMPTY_BOARD: Tuple[int, ...] = (0,) * 9


def other_player(player: int) -> int:
    return P2 if player == P1 else P1


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Tuple[int, ...]:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError(f"Invalid board string {board_str!r}. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)


def get_winner(board: Sequence[int]) -> int:
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != 0 and v == board[b] and v == board[c]:
            return v
    return 0


def is_full(board: Sequence[int]) -> bool:
    return 0 not in board


def is_draw(board: Sequence[int]) -> bool:
    return is_full(board) and get_winner(board) == 0


def is_terminal(board: Sequence[int]) -> bool:
    return get_winner(board) != 0 or is_full(board)


def legal_moves(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == 0]


def apply_move(board: Sequence[int], idx: int, player: int) -> Tuple[int, ...]:
    lst = list(board)
    lst[idx] = player
    return tuple(lst)


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return board.count(P1), board.count(P2)


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return P1 if x == o else P2


def _count_wins(board: Sequence[int], player: int) -> int:
    return sum(1 for pat in WIN_PATTERNS if all(board[i] == player for i in pat))


def is_valid_state(board: Sequence[int]) -> bool:
    if len(board) != 9 or any(v not in (0, P1, P2) for v in board):
        return False
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == P1 and x_count != o_count + 1:
        return False
    if w == P2 and x_count != o_count:
        return False
    if _count_wins(board, P1) > 0 and _count_wins(board, P2) > 0:
        return False
    return True


def validate_position(board: Sequence[int], to_play: Optional[int] = None) -> int:
    """Reject boards that cannot arise from legal alternating play.

    Returns the player to move. Raises ValueError when the board is malformed
    or when ``to_play`` disagrees with the piece-count parity.
    """
    if len(board) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(board)}")
    if not is_valid_state(board):
        raise ValueError(f"Board {serialize_board(board)} is not a reachable state")
    expected = current_player(board)
    if to_play is not None and to_play != expected:
        raise ValueError(
            f"P{to_play} cannot be on move for board {serialize_board(board)}; expected P{expected}"
        )
    return expected
