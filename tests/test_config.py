# tests/test_config.py

from __future__ import annotations

from ratboard import config


def test_defaults(monkeypatch) -> None:
    for name in ("DATABASE", "ALLOWED_ORIGINS", "PORT"):
        monkeypatch.delenv(f"RATBOARD_{name}", raising=False)
    settings = config.load_settings()
    assert settings["ALLOWED_ORIGINS"] == ["http://127.0.0.1:5500", "http://localhost:5500"]
    assert settings["DATABASE"] == config.DATABASE
    assert settings["PORT"] == 5000
    assert settings["MAX_CONTENT_LENGTH"] == 64 * 1024


def test_env_and_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RATBOARD_ALLOWED_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("RATBOARD_PORT", "not-a-number")
    monkeypatch.setenv("RATBOARD_LOG_LEVEL", "debug")
    settings = config.load_settings({"DATABASE": "file:x?mode=memory&cache=shared"})
    assert settings["ALLOWED_ORIGINS"] == ["http://a.test", "http://b.test"]
    assert settings["PORT"] == 5000
    assert settings["LOG_LEVEL"] == "DEBUG"
    assert settings["DATABASE"] == "file:x?mode=memory&cache=shared"


def test_users_seeded_once(app) -> None:
    from ratboard.db import init_db

    again = init_db(app)
    try:
        assert again.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 3
    finally:
        again.close()


def test_setup_logging_writes_file(tmp_path) -> None:
    import logging

    from ratboard.logging_setup import setup_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(level="debug", log_dir=tmp_path / "logs")
        logging.getLogger("ratboard.test").info("hello board")
        for h in root.handlers:
            h.flush()
        assert "hello board" in (tmp_path / "logs" / "ratboard.log").read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
