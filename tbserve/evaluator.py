"""Evaluate a single legal move against the tablebases."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import chess

from tbserve.tablebase import CorruptTablebase, GaviotaProber, ProbeFailed, SyzygyProber
from tbserve.variants import STANDARD, Variant

logger = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """Outcome of one move, seen from the side to move after it.

    ``wdl`` and ``dtz`` follow the tablebase convention (positive is good
    for the side to move after the move). ``dtm`` is stored from the point
    of view of the player who made the move.
    """
    uci: str
    san: str
    checkmate: bool = False
    stalemate: bool = False
    insufficient_material: bool = False
    zeroing: bool = False
    wdl: Optional[int] = None
    dtz: Optional[int] = None
    dtm: Optional[int] = None


def wdl_from_dtz(dtz: int, halfmove_clock: int) -> int:
    """Map a DTZ value to a WDL category, accounting for the 50-move rule."""
    if dtz < -100 and dtz - halfmove_clock <= -100:
        return -1
    if dtz > 100 and dtz + halfmove_clock >= -100:
        return 1
    if dtz < 0:
        return -2
    if dtz > 0:
        return 2
    return 0


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@contextmanager
def pushed(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """Play ``move`` for the duration of the block."""
    board.push(move)
    try:
        yield board
    finally:
        board.pop()


class MoveEvaluator:
    def __init__(
        self,
        dtz_prober: SyzygyProber,
        dtm_prober: GaviotaProber | None = None,
        variant: Variant = STANDARD,
    ) -> None:
        self.dtz_prober = dtz_prober
        self.dtm_prober = dtm_prober
        self.variant = variant

    def evaluate(self, board: chess.Board, move: chess.Move) -> MoveRecord:
        """Build the MoveRecord for ``move``; ``board`` is left unchanged."""
        record = MoveRecord(uci=board.uci(move), san=board.san(move))

        with pushed(board, move):
            num_moves = board.legal_moves.count()
            record.checkmate = self.variant.is_checkmate(board, num_moves)
            record.stalemate = num_moves == 0 and not record.checkmate
            record.insufficient_material = self.variant.insufficient_material(board)
            record.zeroing = board.halfmove_clock == 0

            if record.checkmate:
                record.wdl = -2
                if self.dtm_prober is not None:
                    record.dtm = 0
            elif record.stalemate or record.insufficient_material:
                record.wdl = 0
            elif self._in_bounds(board, self.dtz_prober.max_pieces):
                self._probe(board, record)

        return record

    @staticmethod
    def _in_bounds(board: chess.Board, max_pieces: int) -> bool:
        return not board.castling_rights and chess.popcount(board.occupied) <= max_pieces

    def _probe(self, board: chess.Board, record: MoveRecord) -> None:
        try:
            dtz = self.dtz_prober.probe_dtz(board)
        except ProbeFailed as exc:
            logger.warning("dtz probe failed after %s: %s", record.uci, exc)
            return

        record.dtz = dtz
        record.wdl = wdl_from_dtz(dtz, board.halfmove_clock)

        if self.dtm_prober is None or not self._in_bounds(board, self.dtm_prober.max_pieces):
            return

        try:
            dtm = self.dtm_prober.probe_dtm(board)
        except ProbeFailed as exc:
            logger.debug("gaviota probe failed after %s: %s", record.uci, exc)
            return

        if _sign(dtm or 0) != _sign(dtz):
            raise CorruptTablebase(
                f"dtz {dtz} and dtm {dtm} disagree for {board.fen()}"
            )
        if dtm is not None:
            record.dtm = -dtm
