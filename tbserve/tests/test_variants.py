import chess
import chess.variant
import pytest

from tbserve.variants import ATOMIC, STANDARD, get_variant


@pytest.mark.parametrize("fen, expected", [
    ("4k3/8/8/8/8/8/8/4K3 w - - 0 1", True),  # bare kings
    ("4k3/8/8/8/8/8/8/4KN2 w - - 0 1", True),  # lone knight
    ("4k3/8/8/8/8/8/8/4KB2 w - - 0 1", True),  # lone bishop
    ("4k3/8/8/8/8/8/8/4KNN1 w - - 0 1", False),  # two knights
    ("4kn2/8/8/8/8/8/8/4KB2 w - - 0 1", False),  # knight and bishop
    ("4kb2/8/8/8/8/8/8/2B1K3 w - - 0 1", True),  # bishops on dark squares
    ("2b1k3/8/8/8/8/8/8/2B1K3 w - - 0 1", False),  # opposite coloured bishops
    ("4k3/8/8/8/8/8/4P3/4K3 w - - 0 1", False),
    ("4k3/8/8/8/8/8/8/4KR2 w - - 0 1", False),
    ("4k3/8/8/8/8/8/8/4KQ2 w - - 0 1", False),
])
def test_standard_insufficient_material(fen, expected):
    assert STANDARD.insufficient_material(chess.Board(fen)) is expected


def test_atomic_insufficient_material_counts_pieces():
    assert ATOMIC.insufficient_material(chess.variant.AtomicBoard("4k3/8/8/8/8/8/8/4K3 w - - 0 1")) is True
    assert ATOMIC.insufficient_material(chess.variant.AtomicBoard("4k3/8/8/8/8/8/8/4KN2 w - - 0 1")) is False


def test_king_rules():
    assert STANDARD.kings_ok(1, 1)
    assert not STANDARD.kings_ok(1, 0)
    assert not STANDARD.kings_ok(2, 1)
    assert ATOMIC.kings_ok(1, 0)
    assert ATOMIC.kings_ok(0, 1)
    assert not ATOMIC.kings_ok(0, 0)


def test_checkmate_and_stalemate():
    mated = chess.Board("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
    count = mated.legal_moves.count()
    assert STANDARD.is_checkmate(mated, count)
    assert not STANDARD.is_stalemate(mated, count)

    stalemated = chess.Board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    count = stalemated.legal_moves.count()
    assert not STANDARD.is_checkmate(stalemated, count)
    assert STANDARD.is_stalemate(stalemated, count)

    start = chess.Board()
    count = start.legal_moves.count()
    assert not STANDARD.is_checkmate(start, count)
    assert not STANDARD.is_stalemate(start, count)


def test_lost_king_is_checkmate_in_atomic():
    board = chess.variant.AtomicBoard("8/8/8/8/8/8/8/4k3 w - - 0 1")
    count = board.legal_moves.count()
    assert count == 0
    assert ATOMIC.is_checkmate(board, count)
    assert not ATOMIC.is_stalemate(board, count)


def test_get_variant():
    assert get_variant("chess") is STANDARD
    assert get_variant("atomic") is ATOMIC
    with pytest.raises(ValueError):
        get_variant("crazyhouse")
