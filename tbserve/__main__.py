"""
Run the tablebase server.

Usage:
    python -m tbserve --syzygy /path/to/syzygy [--gaviota /path/to/gaviota] [--port 5000]
"""

import logging
import sys

import uvicorn

from tbserve.config import ServerConfig, configure_logging, parse_args
from tbserve.evaluator import MoveEvaluator
from tbserve.resolver import Resolver
from tbserve.server import create_app
from tbserve.tablebase import GaviotaProber, SyzygyProber
from tbserve.variants import get_variant

logger = logging.getLogger("tbserve")

EX_CONFIG = 78


def build(config: ServerConfig):
    """Open the tablebases and wire up the app. Exits on configuration errors."""
    variant = get_variant(config.variant)

    if not config.syzygy_paths:
        logger.error("at least some syzygy tables are required (--syzygy)")
        sys.exit(EX_CONFIG)

    logger.info("SYZYGY initialization")
    try:
        syzygy = SyzygyProber.open(config.syzygy_paths, variant)
    except OSError as exc:
        logger.error("could not open syzygy tables: %s", exc)
        sys.exit(EX_CONFIG)
    if syzygy.max_pieces < 3:
        syzygy.close()
        logger.error("at least some syzygy tables are required (--syzygy %s)",
                     ":".join(config.syzygy_paths))
        sys.exit(EX_CONFIG)
    logger.info("  Path = %s", ":".join(config.syzygy_paths))
    logger.info("  Cardinality = %d", syzygy.max_pieces)

    gaviota = None
    if config.gaviota_paths:
        if not variant.supports_dtm:
            syzygy.close()
            logger.error("gaviota tables are not available for %s", variant.name)
            sys.exit(EX_CONFIG)
        try:
            gaviota = GaviotaProber.open(config.gaviota_paths)
        except OSError as exc:
            syzygy.close()
            logger.error("could not open gaviota tables: %s", exc)
            sys.exit(EX_CONFIG)
        logger.info("GAVIOTA path = %s", ":".join(config.gaviota_paths))

    evaluator = MoveEvaluator(syzygy, gaviota, variant)
    resolver = Resolver(evaluator, variant)
    return create_app(config, resolver, include_dtm=gaviota is not None)


def main(argv: list[str] | None = None) -> None:
    config = parse_args(argv)
    configure_logging(config)
    app = build(config)
    logger.info("%s tbserve listening on http://%s:%d ...", config.variant, config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
