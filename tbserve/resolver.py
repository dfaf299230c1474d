"""Turn a FEN query into a ranked list of tablebase moves."""

import logging
from dataclasses import dataclass, field

import chess

from tbserve.evaluator import MoveEvaluator, MoveRecord
from tbserve.fen import normalize_fen, validate_fen
from tbserve.ranking import rank_moves
from tbserve.variants import STANDARD, Variant

logger = logging.getLogger(__name__)

# Repaired in Resolver.parse instead of rejected
_TOLERATED_STATUS = chess.STATUS_BAD_CASTLING_RIGHTS | chess.STATUS_INVALID_EP_SQUARE


class QueryError(ValueError):
    """A client-side problem with the requested position."""
    reason = "bad request"

    def __init__(self, fen: str = "") -> None:
        super().__init__(f"{self.reason}: {fen!r}" if fen else self.reason)
        self.fen = fen


class MissingFen(QueryError):
    reason = "missing position"


class InvalidFen(QueryError):
    reason = "invalid position encoding"


class IllegalPosition(QueryError):
    reason = "illegal position"


class InvalidCallback(QueryError):
    reason = "invalid callback"


@dataclass
class QueryResult:
    checkmate: bool = False
    stalemate: bool = False
    moves: list[MoveRecord] = field(default_factory=list)


class Resolver:
    def __init__(self, evaluator: MoveEvaluator, variant: Variant = STANDARD) -> None:
        self.evaluator = evaluator
        self.variant = variant

    def parse(self, fen_text: str | None) -> chess.Board:
        """Validate and set up the query position.

        Raises MissingFen, InvalidFen or IllegalPosition.
        """
        if not fen_text:
            raise MissingFen()

        fen = normalize_fen(fen_text)
        if not validate_fen(fen, self.variant):
            raise InvalidFen(fen)

        try:
            board = self.variant.board_class(fen, chess960=True)
        except ValueError as exc:
            raise IllegalPosition(fen) from exc

        if board.status() & ~_TOLERATED_STATUS:
            raise IllegalPosition(fen)

        board.castling_rights = board.clean_castling_rights()
        if board.ep_square is not None and not board.has_legal_en_passant():
            board.ep_square = None
        return board

    def resolve(self, fen_text: str | None) -> QueryResult:
        board = self.parse(fen_text)
        logger.debug("probing: %s", board.fen())

        legal_moves = list(board.legal_moves)
        result = QueryResult(
            checkmate=self.variant.is_checkmate(board, len(legal_moves)),
            stalemate=self.variant.is_stalemate(board, len(legal_moves)),
        )

        records = [self.evaluator.evaluate(board, move) for move in legal_moves]
        result.moves = rank_moves(records)
        return result
