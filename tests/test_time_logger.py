"""Tests for the time_logger module."""

import time

import pytest

from mork.time_logger import TimeLogger, TimingEvent


class TestTimingEvent:
    """Test TimingEvent records."""

    def test_timing_event_creation(self):
        event = TimingEvent(
            name="test_event",
            event_type="start",
            timestamp=123.456,
        )
        assert event.name == "test_event"
        assert event.event_type == "start"
        assert event.timestamp == 123.456
        assert event.metadata == {}

    def test_timing_event_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            TimingEvent(name="x", event_type="pause", timestamp=1.0)


class TestTimeLogger:
    """Test TimeLogger class."""

    def test_initialization_default(self):
        logger = TimeLogger()
        assert logger.verbosity == "default"
        assert logger.events == []

    @pytest.mark.parametrize("verbosity", [None, "None"])
    def test_initialization_none(self, verbosity):
        assert TimeLogger(verbosity=verbosity).verbosity is None

    def test_initialization_invalid_verbosity(self):
        with pytest.raises(ValueError, match="verbosity must be"):
            TimeLogger(verbosity="invalid")

    def test_none_verbosity_no_op(self):
        """A logger with None verbosity records nothing."""
        logger = TimeLogger(verbosity=None)
        logger.start_event("test")
        logger.stop_event("test")
        logger.progress("test", "message")
        assert len(logger.events) == 0

    def test_set_verbosity(self):
        logger = TimeLogger(verbosity='default')
        logger.set_verbosity('verbose')
        assert logger.verbosity == 'verbose'
        logger.set_verbosity(None)
        assert logger.verbosity is None
        with pytest.raises(ValueError):
            logger.set_verbosity('loud')

    def test_empty_event_name_rejected(self):
        logger = TimeLogger()
        with pytest.raises(ValueError, match="cannot be empty"):
            logger.start_event("")

    def test_start_stop_duration(self):
        logger = TimeLogger()
        logger.start_event("test_operation")
        time.sleep(0.01)
        logger.stop_event("test_operation")

        assert [event.event_type for event in logger.events] == [
            "start", "stop",
        ]
        duration = logger.get_event_duration("test_operation")
        assert duration is not None
        assert duration >= 0.01

    def test_get_event_duration_no_stop(self):
        logger = TimeLogger()
        logger.start_event("test_operation")
        assert logger.get_event_duration("test_operation") is None

    def test_progress_event(self):
        logger = TimeLogger()
        logger.progress("test_operation", "50% complete", done=1)
        assert logger.events[0].event_type == "progress"
        assert logger.events[0].metadata == {
            "message": "50% complete", "done": 1,
        }

    def test_aggregate_durations_sum_repeats(self):
        logger = TimeLogger()
        for _ in range(2):
            logger.start_event("analysis")
            logger.stop_event("analysis")
        durations = logger.get_aggregate_durations()
        assert set(durations) == {"analysis"}
        assert durations["analysis"] >= 0.0

    def test_clear(self):
        logger = TimeLogger()
        logger.start_event("analysis")
        logger.clear()
        assert logger.events == []
        assert logger.get_event_duration("analysis") is None

    def test_print_summary_default_verbosity(self, capsys):
        logger = TimeLogger(verbosity="default")
        logger.start_event("computation_order")
        logger.stop_event("computation_order")
        logger.print_summary()
        captured = capsys.readouterr()
        assert "Timing Summary" in captured.out
        assert "computation_order" in captured.out

    def test_verbose_prints_on_stop(self, capsys):
        logger = TimeLogger(verbosity="verbose")
        logger.start_event("computation_order")
        logger.stop_event("computation_order")
        captured = capsys.readouterr()
        assert captured.out.startswith("computation_order: ")

        logger.print_summary()
        assert capsys.readouterr().out == ""

    def test_debug_prints_every_event(self, capsys):
        logger = TimeLogger(verbosity="debug")
        logger.start_event("computation_order")
        logger.progress("computation_order", "3 components")
        logger.stop_event("computation_order")
        logger.stop_event("orphan")
        out = capsys.readouterr().out
        assert "[DEBUG] Started: computation_order" in out
        assert "[DEBUG] Progress: computation_order - 3 components" in out
        assert "[DEBUG] Stopped: computation_order" in out
        assert "without matching start" in out
