"""Rules that differ between the supported tablebase variants.

A Variant is picked once from the process configuration and handed to the
validator, the evaluator and the resolver.
"""

from dataclasses import dataclass
from typing import Callable

import chess
import chess.variant


def _one_king_each(white_kings: int, black_kings: int) -> bool:
    return white_kings == 1 and black_kings == 1


def _any_king(white_kings: int, black_kings: int) -> bool:
    # Kings may be blown up in atomic chess
    return white_kings + black_kings >= 1


def standard_insufficient_material(board: chess.Board) -> bool:
    """Both sides together cannot force mate."""
    # Easy mating material
    if board.pawns or board.rooks or board.queens:
        return False

    minors = board.knights | board.bishops
    if chess.popcount(minors) == 1:
        return True

    if board.knights:
        return False

    # All bishops on the same colour
    if not board.bishops & chess.BB_DARK_SQUARES:
        return True
    if not board.bishops & chess.BB_LIGHT_SQUARES:
        return True
    return False


def bare_insufficient_material(board: chess.Board) -> bool:
    return chess.popcount(board.occupied) <= 2


@dataclass(frozen=True)
class Variant:
    name: str
    board_class: type
    kings_ok: Callable[[int, int], bool]
    insufficient_material: Callable[[chess.Board], bool]
    king_capture: bool = False
    supports_dtm: bool = False

    def is_checkmate(self, board: chess.Board, legal_move_count: int) -> bool:
        if legal_move_count:
            return False
        if board.is_check():
            return True
        return self.king_capture and board.is_variant_loss()

    def is_stalemate(self, board: chess.Board, legal_move_count: int) -> bool:
        return legal_move_count == 0 and not self.is_checkmate(board, legal_move_count)


STANDARD = Variant(
    name="chess",
    board_class=chess.Board,
    kings_ok=_one_king_each,
    insufficient_material=standard_insufficient_material,
    supports_dtm=True,
)

ATOMIC = Variant(
    name="atomic",
    board_class=chess.variant.AtomicBoard,
    kings_ok=_any_king,
    insufficient_material=bare_insufficient_material,
    king_capture=True,
)

VARIANTS = {variant.name: variant for variant in (STANDARD, ATOMIC)}


def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"unknown variant: {name}") from None
