"""
Property-based tests for run logging.

Feature: propcheck
Property 7: 运行日志记录完整性
"""

import json
from datetime import datetime, timedelta

from hypothesis import given, strategies as st, settings

from propcheck.logger import RunLogger
from propcheck.models import OutcomeStatus, PropertyResult, TestOutcome, TestParameters, TestStatistics
from propcheck.run_logger import CheckLogger, get_logger

property_name_strategy = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz_"), min_size=1, max_size=20
)
status_strategy = st.sampled_from(list(OutcomeStatus))
count_strategy = st.integers(min_value=0, max_value=100_000)
duration_strategy = st.floats(min_value=0.0, max_value=1e6, allow_nan=False, allow_infinity=False)


class TestRunLoggerProperties:
    """
    Property 7: 运行日志记录完整性

    Every logged run is retrievable with the values it was logged with.
    """

    @settings(max_examples=100)
    @given(
        property_name=property_name_strategy,
        status=status_strategy,
        succeeded=count_strategy,
        discarded=count_strategy,
        duration_ms=duration_strategy,
        args=st.lists(st.text(max_size=10), max_size=4),
    )
    def test_logged_entry_is_retrievable(
        self,
        property_name: str,
        status: OutcomeStatus,
        succeeded: int,
        discarded: int,
        duration_ms: float,
        args: list[str],
    ):
        logger = RunLogger()
        entry = logger.log(property_name, status, succeeded, discarded, duration_ms, tuple(args))

        assert entry.property_name == property_name
        assert entry.status is status
        assert entry.succeeded == succeeded
        assert entry.discarded == discarded
        assert entry.args == tuple(args)
        assert entry in logger.get_all_logs()
        assert entry in logger.get_logs_by_property(property_name)
        assert entry in logger.get_logs_by_status(status)
        assert (entry in logger.get_failures()) == (status is OutcomeStatus.FAILED)

    def test_default_timestamp(self):
        logger = RunLogger()
        before = datetime.now()
        entry = logger.log("p", OutcomeStatus.PASSED, 1, 0, 0.1)
        assert before <= entry.timestamp <= datetime.now()

    def test_explicit_timestamp(self):
        ts = datetime.now() - timedelta(days=1)
        entry = RunLogger().log("p", OutcomeStatus.PASSED, 1, 0, 0.1, timestamp=ts)
        assert entry.timestamp == ts

    def test_get_all_logs_returns_copy_and_clear(self):
        logger = RunLogger()
        logger.log("p", OutcomeStatus.EXHAUSTED, 0, 5, 1.0)
        logger.get_all_logs().clear()
        assert len(logger.get_all_logs()) == 1
        logger.clear()
        assert logger.get_all_logs() == []


FAILED_STATS = TestStatistics(TestOutcome.failed(PropertyResult(False, ("5",))), 3, 1)
PARAMS = TestParameters(10, 100, 10)


class TestCheckLogger:
    """JSONL run logs"""

    def test_writes_one_line_per_run(self, tmp_path):
        logger = CheckLogger("prop", enabled=True, log_dir=tmp_path)
        logger.log_run(FAILED_STATS, PARAMS, 12.3456, seed=7)
        logger.log_run(FAILED_STATS, PARAMS, 1.0, tag="extra")

        files = list((tmp_path / "prop").glob("*.jsonl"))
        assert len(files) == 1
        first, second = [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]
        assert first["status"] == "failed"
        assert first["args"] == ["5"]
        assert first["succeeded"] == 3
        assert first["discarded"] == 1
        assert first["seed"] == 7
        assert first["duration_ms"] == 12.35
        assert second["tag"] == "extra"

    def test_disabled_logger_writes_nothing(self, tmp_path):
        CheckLogger("prop", enabled=False, log_dir=tmp_path).log_run(FAILED_STATS, PARAMS, 1.0)
        assert not (tmp_path / "prop").exists()

    def test_enabled_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROPCHECK_LOGGING", "yes")
        monkeypatch.setenv("PROPCHECK_LOG_DIR", str(tmp_path))
        logger = CheckLogger("env_prop")
        assert logger.enabled
        assert logger.log_root == tmp_path

    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("PROPCHECK_LOGGING", raising=False)
        assert not CheckLogger("default_prop").enabled

    def test_write_failure_does_not_raise(self, tmp_path, capsys):
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory", encoding="utf-8")
        CheckLogger("prop", enabled=True, log_dir=blocker).log_run(FAILED_STATS, PARAMS, 1.0)
        assert "Warning: Failed to write check log" in capsys.readouterr().out

    def test_get_logger_caches(self):
        assert get_logger("cached_prop") is get_logger("cached_prop")
