"""Tests for the server launcher in main.py (argument parsing and uvicorn call)."""

from unittest.mock import patch

import main
from core.config import get_settings


def test_defaults_come_from_settings() -> None:
    args = main.build_parser().parse_args([])
    assert args.port == get_settings().port
    assert args.host == get_settings().host
    assert args.reload is False


def test_port_override() -> None:
    args = main.build_parser().parse_args(["--port", "8080", "--reload"])
    assert args.port == 8080
    assert args.reload is True


def test_main_runs_uvicorn() -> None:
    with patch("main.uvicorn.run") as run:
        main.main(["--host", "127.0.0.1", "--port", "4000"])
    run.assert_called_once_with("api.main:app", host="127.0.0.1", port=4000, reload=False)
