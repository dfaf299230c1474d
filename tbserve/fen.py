"""Strict FEN validation.

Runs before python-chess ever sees the text, so anything that is not a
plain six-field FEN is turned away here.
"""

from tbserve.variants import STANDARD, Variant

PIECES = set("pnbrqkPNBRQK")
CASTLING = set("abcdefghABCDEFGHkKqQ")
FILES = set("abcdefgh")


def normalize_fen(text: str) -> str:
    """Undo the underscore convention used to keep FENs URL friendly."""
    return text.replace("_", " ")


def _valid_rank(rank: str) -> bool:
    files = 0
    last_was_number = False
    for c in rank:
        if "1" <= c <= "8":
            if last_was_number:
                return False
            files += int(c)
            last_was_number = True
        elif c in PIECES:
            files += 1
            last_was_number = False
        else:
            return False
        if files > 8:
            return False
    return files == 8


def _valid_castling(field: str) -> bool:
    if field == "-":
        return True
    return bool(field) and all(c in CASTLING for c in field)


def _valid_ep(field: str) -> bool:
    if field == "-":
        return True
    return len(field) == 2 and field[0] in FILES and field[1] in "36"


def _valid_number(field: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return bool(field) and all("0" <= c <= "9" for c in field)


def validate_fen(text: str, variant: Variant = STANDARD) -> bool:
    """Return True if ``text`` is a well-formed FEN for ``variant``."""
    fields = text.split(" ")
    if len(fields) != 6:
        return False
    board, turn, castling, ep, halfmove, fullmove = fields

    ranks = board.split("/")
    if len(ranks) != 8:
        return False
    if not all(_valid_rank(rank) for rank in ranks):
        return False
    if not variant.kings_ok(board.count("K"), board.count("k")):
        return False

    if turn not in ("w", "b"):
        return False

    return (
        _valid_castling(castling)
        and _valid_ep(ep)
        and _valid_number(halfmove)
        and _valid_number(fullmove)
    )
