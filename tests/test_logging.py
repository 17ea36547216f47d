from __future__ import annotations

from pathlib import Path

from taskboard.config import Settings
from taskboard.infra.logging import setup_logging


def test_setup_logging_creates_log_file(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"

    log_file = setup_logging(Settings(log_dir=str(log_dir)))

    assert log_file == log_dir / "taskboard.log"
    assert log_file.exists()
