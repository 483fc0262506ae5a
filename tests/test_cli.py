from __future__ import annotations

from pathlib import Path

import pytest

from conftest import payload
from crossbench.cli import build_parser, main


def _args(tmp_path: Path, *extra: str) -> list[str]:
    return ["--data-dir", str(tmp_path / "data"), "--output-dir", str(tmp_path / "output"), *extra]


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.endpoint is None
        assert args.input is None
        assert args.log_level == "INFO"


class TestMain:
    def test_local_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "models.json"
        source.write_bytes(payload({"name": "m", "organization": "Acme", "gpqa_score": 0.7}))
        assert main(_args(tmp_path, "--input", str(source))) == 0
        assert (tmp_path / "data" / "leaderboard_all.json").exists()
        assert (tmp_path / "output" / "leaderboard.html").exists()
        assert "1 models ranked" in capsys.readouterr().out

    def test_missing_input(self, tmp_path: Path) -> None:
        assert main(_args(tmp_path, "--input", str(tmp_path / "missing.json"))) == 1

    def test_bad_payload_writes_nothing(self, tmp_path: Path) -> None:
        source = tmp_path / "models.json"
        source.write_text('{"not": "an array"}', "utf-8")
        assert main(_args(tmp_path, "--input", str(source))) == 1
        assert not (tmp_path / "data").exists()

    def test_bad_log_level(self, tmp_path: Path) -> None:
        assert main(_args(tmp_path, "--log-level", "LOUD")) == 2

    def test_bad_endpoint(self, tmp_path: Path) -> None:
        assert main(_args(tmp_path, "--endpoint", "file:///tmp/x")) == 2
