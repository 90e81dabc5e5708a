from pathlib import Path

from src.utils.core import logger as logger_mod


def test_get_logger_creates_file(tmp_path: Path, monkeypatch) -> None:
    """Ensure the central logger writes a log file sink for a bound utility logger."""
    monkeypatch.setenv("LOG_TO_FILE", "1")
    monkeypatch.setattr(logger_mod, "LOGS_BASE_DIR", tmp_path)

    try:
        lg = logger_mod.get_logger(__name__, utility="testutil")
        if not hasattr(lg, "info"):
            raise AssertionError("bound logger is missing 'info' method")

        # Emit a log and flush queued sinks
        lg.info("unit test log entry")
        logger_mod.shutdown_logging()

        util_dir = tmp_path / "testutil"
        files = list(util_dir.glob("testutil_*.log"))
        if not files:
            raise AssertionError(f"no log files were created in {util_dir}")
        assert "unit test log entry" in files[0].read_text(encoding="utf-8")
    finally:
        logger_mod.shutdown_logging()


def test_no_file_sink_unless_enabled(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("LOG_TO_FILE", raising=False)
    monkeypatch.setattr(logger_mod, "LOGS_BASE_DIR", tmp_path)

    lg = logger_mod.get_logger(__name__, utility="quiet")
    lg.info("console only")

    assert not (tmp_path / "quiet").exists()


def test_utility_is_derived_from_module_name() -> None:
    assert logger_mod._utility_for("src.sheet_financials.gateway") == "sheet_financials"
    assert logger_mod._utility_for("src.utils.core.retry") == "utils"
    assert logger_mod._utility_for("__main__") == "general"
