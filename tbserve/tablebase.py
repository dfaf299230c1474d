"""Endgame tablebase probing backends.

Syzygy tables give the distance to zeroing (DTZ) every query needs.
Gaviota tables are optional and add the distance to mate (DTM) for
positions with up to five pieces.
"""

import logging
import threading
from pathlib import Path
from typing import Iterable

import chess
import chess.gaviota
import chess.syzygy

from tbserve.variants import STANDARD, Variant

logger = logging.getLogger(__name__)

GAVIOTA_MAX_PIECES = 5


class ProbeFailed(Exception):
    """The backend has no answer for this position."""


class CorruptTablebase(Exception):
    """The backend returned an answer that cannot be right."""


def table_cardinality(name: str) -> int:
    """Number of pieces in a table named like ``KRPvKR``."""
    return sum(1 for c in name if c != "v")


class SyzygyProber:
    """Thread-safe DTZ lookups in a set of Syzygy directories."""

    def __init__(self, tablebase: chess.syzygy.Tablebase, max_pieces: int) -> None:
        self.tablebase = tablebase
        self.max_pieces = max_pieces

    @classmethod
    def open(cls, paths: Iterable[str], variant: Variant = STANDARD) -> "SyzygyProber":
        tablebase = chess.syzygy.Tablebase(VariantBoard=variant.board_class)
        suffixes = (variant.board_class.tbw_suffix, variant.board_class.tbz_suffix)
        max_pieces = 0
        try:
            for path in paths:
                num = tablebase.add_directory(path)
                logger.debug("Loaded %d syzygy tables from %s", num, path)
                for table in Path(path).iterdir():
                    if table.suffix in suffixes:
                        max_pieces = max(max_pieces, table_cardinality(table.stem))
        except OSError:
            tablebase.close()
            raise
        return cls(tablebase, max_pieces)

    def probe_dtz(self, board: chess.Board) -> int:
        """Signed DTZ, positive when the side to move is winning."""
        try:
            return self.tablebase.probe_dtz(board)
        except KeyError as exc:
            raise ProbeFailed(str(exc)) from exc

    def close(self) -> None:
        self.tablebase.close()


class GaviotaProber:
    """DTM lookups in Gaviota tables."""

    max_pieces = GAVIOTA_MAX_PIECES

    def __init__(self, tablebase) -> None:
        self.tablebase = tablebase
        self._lock = threading.Lock()

    @classmethod
    def open(cls, paths: Iterable[str]) -> "GaviotaProber":
        paths = list(paths)
        if not paths:
            raise ValueError("no gaviota directories given")
        tablebase = chess.gaviota.open_tablebase(paths[0])
        for path in paths[1:]:
            tablebase.add_directory(path)
        return cls(tablebase)

    def probe_dtm(self, board: chess.Board) -> int | None:
        """Signed plies to mate for the side to move, or None for a draw."""
        try:
            with self._lock:
                dtm = self.tablebase.probe_dtm(board)
        except KeyError as exc:
            raise ProbeFailed(str(exc)) from exc
        if dtm == 0:
            return None
        return dtm

    def close(self) -> None:
        self.tablebase.close()
