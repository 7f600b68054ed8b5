import pickle
from unittest.mock import Mock

import pytest

from src.shared.telemetry import ANSWERS_SUBMITTED, Telemetry, measure_time


class Timed:
    def __init__(self):
        self.telemetry = Mock()

    @measure_time("work")
    def work(self, value):
        return value * 2

    @measure_time("boom")
    def boom(self):
        raise ValueError("nope")


def test_measure_time_returns_result_and_logs():
    obj = Timed()
    assert obj.work(21) == 42
    obj.telemetry.log_debug.assert_called_once()
    assert obj.telemetry.log_debug.call_args.args[0] == "work"


def test_measure_time_reraises_and_logs_error():
    obj = Timed()
    with pytest.raises(ValueError):
        obj.boom()
    obj.telemetry.log_error.assert_called_once()


def test_start_trace_sets_correlation_id():
    trace_id = Telemetry.start_trace()
    assert Telemetry.get_trace_id() == trace_id
    assert len(trace_id) == 8


def test_log_lines_carry_trace_id(caplog):
    telemetry = Telemetry("Test")
    trace_id = Telemetry.start_trace()
    with caplog.at_level("INFO", logger="qotd.Test"):
        telemetry.log_info("Hello", answer="Content")
    assert f"[{trace_id}] Hello" in caplog.text


def test_telemetry_survives_pickling():
    restored = pickle.loads(pickle.dumps(Telemetry("Pickled")))
    assert restored.logger.name == "qotd.Pickled"


def test_record_submission_counts_per_category():
    before = ANSWERS_SUBMITTED.labels(category="Telemetry Test")._value.get()
    Telemetry.record_submission("Telemetry Test")
    assert ANSWERS_SUBMITTED.labels(category="Telemetry Test")._value.get() == before + 1
