"""Process configuration and command line parsing."""

import argparse
import logging
import os
from dataclasses import dataclass, field

from tbserve.variants import VARIANTS


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 5000
    syzygy_paths: tuple[str, ...] = field(default_factory=tuple)
    gaviota_paths: tuple[str, ...] = field(default_factory=tuple)
    variant: str = "chess"
    verbose: bool = False
    cors: bool = False


def _split_paths(values: list[str] | None) -> tuple[str, ...]:
    paths = []
    for value in values or []:
        paths.extend(segment.strip() for segment in value.split(os.pathsep))
    return tuple(path for path in paths if path)


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        port = 0
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"invalid port: {value}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tbserve",
        description="HTTP server ranking legal moves with endgame tablebases",
    )
    parser.add_argument("--port", "-p", type=_port, default=5000,
                        help="Port to listen on (default: 5000)")
    parser.add_argument("--host", default="127.0.0.1",
                        help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--syzygy", "-s", action="append", metavar="DIR",
                        help="Syzygy directory, may be repeated or separated by os.pathsep")
    parser.add_argument("--gaviota", "-g", action="append", metavar="DIR",
                        help="Gaviota directory for distance to mate, may be repeated")
    parser.add_argument("--variant", choices=sorted(VARIANTS), default="chess",
                        help="Rules the tables were generated for (default: chess)")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every probed position")
    parser.add_argument("--cors", action="store_true",
                        help="Send Access-Control-Allow-Origin: * with every response")
    return parser


def parse_args(argv: list[str] | None = None) -> ServerConfig:
    args = build_parser().parse_args(argv)
    return ServerConfig(
        host=args.host,
        port=args.port,
        syzygy_paths=_split_paths(args.syzygy),
        gaviota_paths=_split_paths(args.gaviota),
        variant=args.variant,
        verbose=args.verbose,
        cors=args.cors,
    )


def configure_logging(config: ServerConfig) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
