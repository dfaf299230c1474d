from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
import logging
import os

from tbserve.config import ServerConfig
from tbserve.resolver import InvalidCallback, QueryError, Resolver
from tbserve.serializer import render, valid_callback
from tbserve.tablebase import CorruptTablebase

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig, resolver: Resolver, include_dtm: bool = False) -> FastAPI:
    app = FastAPI(title="tbserve")

    # ---- Cross-origin ----
    if config.cors:
        @app.middleware("http")
        async def allow_any_origin(request: Request, call_next):
            response = await call_next(request)
            response.headers["Access-Control-Allow-Origin"] = "*"
            return response

    # ---- Errors ----
    @app.exception_handler(QueryError)
    async def query_error(request: Request, exc: QueryError) -> PlainTextResponse:
        return PlainTextResponse(exc.reason, status_code=400)

    @app.exception_handler(CorruptTablebase)
    async def corrupt_tablebase(request: Request, exc: CorruptTablebase) -> Response:
        # Stop serving answers from broken tables
        logger.critical("tablebase inconsistency: %s", exc)
        os.abort()

    # ---- Query endpoint ----
    # Plain def: FastAPI runs it on the thread pool, probes block on disk
    @app.get("/")
    def probe(fen: str | None = None, callback: str | None = None) -> Response:
        if callback and not valid_callback(callback):
            raise InvalidCallback(callback)
        result = resolver.resolve(fen)
        body, media_type = render(result, callback, include_dtm)
        return Response(content=body, media_type=media_type)

    return app
