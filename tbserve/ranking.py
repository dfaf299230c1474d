"""Best-first ordering of evaluated moves.

Records describe the position after each move, so a low ``wdl`` is good for
the player choosing between them.
"""

from typing import Iterable

from tbserve.evaluator import MoveRecord


def _zeroing_key(record: MoveRecord) -> int:
    # Winning: convert. Losing: keep the clock running.
    if record.wdl is None or record.wdl == 0:
        return 0
    if record.wdl < 0:
        return 0 if record.zeroing else 1
    return 1 if record.zeroing else 0


def rank_key(record: MoveRecord) -> tuple:
    has_wdl = record.wdl is not None
    has_dtz = record.dtz is not None
    has_dtm = record.dtm is not None
    # Terminal moves carry no dtz and lead the list
    return (
        has_dtz,
        has_wdl,
        record.wdl if has_wdl else 0,
        not record.checkmate,
        not record.stalemate,
        not record.insufficient_material,
        not has_dtm,
        # Stored dtm is the mover's; larger for the opponent means smaller here
        record.dtm if has_dtm else 0,
        _zeroing_key(record),
        -record.dtz if has_dtz else 0,
        record.uci,
    )


def compare_moves(a: MoveRecord, b: MoveRecord) -> int:
    """-1 if ``a`` ranks before ``b``, 1 if after, 0 if they are tied."""
    ka, kb = rank_key(a), rank_key(b)
    return (ka > kb) - (ka < kb)


def rank_moves(records: Iterable[MoveRecord]) -> list[MoveRecord]:
    return sorted(records, key=rank_key)
