"""JSON and JSONP rendering of query results."""

import json
import re

from tbserve.evaluator import MoveRecord
from tbserve.resolver import QueryResult

JSON_TYPE = "application/json"
JSONP_TYPE = "application/javascript"

# Plain or dotted JavaScript identifiers only
CALLBACK_RE = re.compile(r"[A-Za-z_$][\w$.]*", re.ASCII)


def valid_callback(name: str) -> bool:
    return CALLBACK_RE.fullmatch(name) is not None


def move_to_dict(record: MoveRecord, include_dtm: bool = False) -> dict:
    payload = {
        "uci": record.uci,
        "san": record.san,
        "checkmate": record.checkmate,
        "stalemate": record.stalemate,
        "insufficient_material": record.insufficient_material,
        "zeroing": record.zeroing,
        "wdl": record.wdl,
        "dtz": record.dtz,
    }
    if include_dtm:
        # Clients expect dtm relative to the side to move after the move
        payload["dtm"] = -record.dtm if record.dtm is not None else None
    return payload


def result_to_dict(result: QueryResult, include_dtm: bool = False) -> dict:
    return {
        "checkmate": result.checkmate,
        "stalemate": result.stalemate,
        "moves": [move_to_dict(move, include_dtm) for move in result.moves],
    }


def render(result: QueryResult, callback: str | None = None, include_dtm: bool = False) -> tuple[str, str]:
    """Return the response body and its media type."""
    body = json.dumps(result_to_dict(result, include_dtm))
    if callback:
        return f"{callback}({body})\n", JSONP_TYPE
    return body + "\n", JSON_TYPE
