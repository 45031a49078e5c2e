#!/usr/bin/env python3
"""
Employee Management REST API -- server launcher.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 127.0.0.1 --reload

Environment variables (see core/config.py for the full list):
  JWT_SECRET    Token signing key, at least 32 characters. Required unless DEBUG=true.
  PORT          Listening port when --port is not given. Default 3000.
  DB_HOST, DB_USER, DB_PASSWORD, DB_NAME
                MySQL connection. Without DB_HOST a local SQLite file is used.
"""

import argparse

import uvicorn

from core.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run the Employee Management REST API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Listening port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    print(f"  Server running on port {args.port}")
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
