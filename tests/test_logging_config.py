from __future__ import annotations

import json

from loguru import logger

from mediacdn.logging_config import setup_logging


def test_json_log_file(tmp_path):
    log_file = tmp_path / "logs" / "mediacdn.log"
    setup_logging(level="INFO", json_format=True, log_file=log_file)
    try:
        logger.bind(name="tests").info("flushed {count} path(s)", count=2)
        logger.debug("not written")
    finally:
        logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["level"] == "INFO"
    assert entry["message"] == "flushed 2 path(s)"
    assert entry["name"] == "tests"


def test_setup_from_settings(tmp_path, monkeypatch):
    from mediacdn.logging_config import setup_logging_from_settings
    from mediacdn.settings import Settings

    log_file = tmp_path / "from_settings.log"
    settings = Settings(
        cdn={"backend": "s3", "s3": {"bucket": "media"}},
        logging={"level": "WARNING", "log_file": str(log_file)},
    )
    monkeypatch.setattr("mediacdn.settings.get_settings", lambda: settings)

    setup_logging_from_settings()
    try:
        logger.info("dropped")
        logger.warning("kept")
    finally:
        logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "kept" in content
    assert "dropped" not in content
