import pytest
from fastapi.testclient import TestClient

from tbserve.config import ServerConfig
from tbserve.evaluator import MoveEvaluator
from tbserve.resolver import Resolver
from tbserve.server import create_app
from tbserve.tablebase import ProbeFailed

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
# White promotes with mate: a8=Q# (and a8=R#)
PROMOTION_MATE_FEN = "7k/P7/6K1/8/8/8/8/8 w - - 0 1"
BARE_KINGS_FEN = "4k3/8/8/8/8/8/8/4K3 w - - 0 1"


class FakeDtzProber:
    """Stands in for SyzygyProber. ``dtz=None`` makes every probe fail."""

    def __init__(self, dtz=None, max_pieces: int = 7) -> None:
        self.dtz = dtz
        self.max_pieces = max_pieces
        self.probed: list[str] = []

    def probe_dtz(self, board) -> int:
        self.probed.append(board.fen())
        if self.dtz is None:
            raise ProbeFailed("no such table")
        return self.dtz(board) if callable(self.dtz) else self.dtz


class FakeDtmProber:
    """Stands in for GaviotaProber. ``fail=True`` makes every probe fail."""

    max_pieces = 5

    def __init__(self, dtm=None, fail: bool = False) -> None:
        self.dtm = dtm
        self.fail = fail
        self.probed: list[str] = []

    def probe_dtm(self, board):
        self.probed.append(board.fen())
        if self.fail:
            raise ProbeFailed("no such table")
        return self.dtm(board) if callable(self.dtm) else self.dtm


def make_client(dtz=-5, dtm_prober=None, cors: bool = False) -> TestClient:
    evaluator = MoveEvaluator(FakeDtzProber(dtz), dtm_prober)
    app = create_app(ServerConfig(cors=cors), Resolver(evaluator), include_dtm=dtm_prober is not None)
    return TestClient(app)


@pytest.fixture
def dtz_prober():
    return FakeDtzProber(-5)


@pytest.fixture
def resolver(dtz_prober):
    return Resolver(MoveEvaluator(dtz_prober))


@pytest.fixture
def client():
    return make_client()
