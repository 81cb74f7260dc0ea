#!/usr/bin/env python3
"""
Resource & Capacity Management: launch the API server.

Usage:
    python main.py                          # http://127.0.0.1:8000
    python main.py --port 9000              # http://127.0.0.1:9000
    python main.py --host 0.0.0.0           # listen on all interfaces
    python main.py --mongodb-uri mongodb://db:27017 --db-name rcm
    python main.py --reload                 # auto-reload on code changes
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from utils.config import AppConfig


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Launch the Resource & Capacity Management API.",
    )
    parser.add_argument(
        "--host", default=cfg.api_host,
        help=f"Bind address (default: {cfg.api_host} or APP_HOST env var)",
    )
    parser.add_argument(
        "--port", type=int, default=cfg.api_port,
        help=f"Port to listen on (default: {cfg.api_port} or APP_PORT env var)",
    )
    parser.add_argument(
        "--mongodb-uri", default=None,
        help="MongoDB connection string (default: MONGODB_URI env var)",
    )
    parser.add_argument(
        "--db-name", default=None,
        help="Database name (default: DB_NAME env var)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    cfg = AppConfig.from_env()
    args = build_parser(cfg).parse_args(argv)

    # api.app reads its configuration from the environment at import time.
    if args.mongodb_uri:
        os.environ["MONGODB_URI"] = args.mongodb_uri
    if args.db_name:
        os.environ["DB_NAME"] = args.db_name

    print(f"Starting Resource & Capacity Management API at http://{args.host}:{args.port}")
    print(f"Database: {os.getenv('DB_NAME', cfg.db_name)}")
    print()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
