"""Time logging for the stage-order analysis and other one-off setup work."""

import time
from typing import Any, Dict, Optional

import attrs

_VERBOSITY_LEVELS = {None, 'default', 'verbose', 'debug'}


@attrs.define(frozen=True)
class TimingEvent:
    """Record of a single timing event.

    Attributes
    ----------
    name : str
        Identifier for the event (e.g., 'computation_order')
    event_type : str
        Type of event: 'start', 'stop', or 'progress'
    timestamp : float
        Wall-clock time from time.perf_counter()
    metadata : dict
        Optional metadata (stage counts, component counts, messages)
    """
    name: str = attrs.field(validator=attrs.validators.instance_of(str))
    event_type: str = attrs.field(
        validator=attrs.validators.in_({'start', 'stop', 'progress'})
    )
    timestamp: float = attrs.field(
        validator=attrs.validators.instance_of(float)
    )
    metadata: dict = attrs.field(factory=dict)


def _normalise_verbosity(verbosity: Optional[str]) -> Optional[str]:
    if verbosity == 'None':
        verbosity = None
    if verbosity not in _VERBOSITY_LEVELS:
        raise ValueError(
            f"verbosity must be None, 'default', 'verbose', or 'debug', "
            f"got '{verbosity}'"
        )
    return verbosity


class TimeLogger:
    """Callback-based timing system for mork setup operations.

    Parameters
    ----------
    verbosity : str or None, default='default'
        Output verbosity level. Options:
        - None: record nothing
        - 'default': Aggregate times only, printed by ``print_summary``
        - 'verbose': Print each duration as its event stops
        - 'debug': Print all events with start/stop/progress

    Attributes
    ----------
    verbosity : str or None
        Current verbosity level
    events : list[TimingEvent]
        Chronological list of all recorded events
    """

    def __init__(self, verbosity: Optional[str] = 'default') -> None:
        self.verbosity = _normalise_verbosity(verbosity)
        self.events: list[TimingEvent] = []
        self._active_starts: Dict[str, float] = {}

    def set_verbosity(self, verbosity: Optional[str]) -> None:
        """Change the verbosity level; recorded events are kept."""
        self.verbosity = _normalise_verbosity(verbosity)

    def clear(self) -> None:
        """Forget all recorded events."""
        self.events.clear()
        self._active_starts.clear()

    def start_event(self, event_name: str, **metadata: Any) -> None:
        """Record the start of a timed operation.

        Parameters
        ----------
        event_name : str
            Identifier for this event
        **metadata : Any
            Optional metadata to store with event
        """
        if not event_name:
            raise ValueError("event_name cannot be empty")
        if self.verbosity is None:
            return

        timestamp = time.perf_counter()
        self.events.append(
            TimingEvent(
                name=event_name,
                event_type='start',
                timestamp=timestamp,
                metadata=metadata,
            )
        )
        self._active_starts[event_name] = timestamp

        if self.verbosity == 'debug':
            print(f"[DEBUG] Started: {event_name}")

    def stop_event(self, event_name: str, **metadata: Any) -> None:
        """Record the end of a timed operation.

        Notes
        -----
        A stop without a matching start is stored anyway and reported in
        debug mode.
        """
        if not event_name:
            raise ValueError("event_name cannot be empty")
        if self.verbosity is None:
            return

        timestamp = time.perf_counter()
        self.events.append(
            TimingEvent(
                name=event_name,
                event_type='stop',
                timestamp=timestamp,
                metadata=metadata,
            )
        )

        start = self._active_starts.pop(event_name, None)
        if start is None:
            if self.verbosity == 'debug':
                print(f"[DEBUG] Warning: stop_event('{event_name}') "
                      "without matching start")
            return
        duration = timestamp - start
        if self.verbosity == 'debug':
            print(f"[DEBUG] Stopped: {event_name} ({duration:.6f}s)")
        elif self.verbosity == 'verbose':
            print(f"{event_name}: {duration:.6f}s")

    def progress(
        self, event_name: str, message: str, **metadata: Any
    ) -> None:
        """Record a progress update within an operation.

        Only printed in debug mode.
        """
        if not event_name:
            raise ValueError("event_name cannot be empty")
        if self.verbosity is None:
            return

        metadata_with_msg = dict(metadata)
        metadata_with_msg['message'] = message
        self.events.append(
            TimingEvent(
                name=event_name,
                event_type='progress',
                timestamp=time.perf_counter(),
                metadata=metadata_with_msg,
            )
        )

        if self.verbosity == 'debug':
            print(f"[DEBUG] Progress: {event_name} - {message}")

    def get_event_duration(self, event_name: str) -> Optional[float]:
        """Return the duration of the most recent completed ``event_name``,
        or None if no start/stop pair exists."""
        start_time = None
        stop_time = None

        for event in reversed(self.events):
            if event.name == event_name:
                if event.event_type == 'stop' and stop_time is None:
                    stop_time = event.timestamp
                elif event.event_type == 'start' and stop_time is not None:
                    start_time = event.timestamp
                    break

        if start_time is not None and stop_time is not None:
            return stop_time - start_time
        return None

    def get_aggregate_durations(self) -> Dict[str, float]:
        """Sum the durations of all completed events, keyed by name."""
        durations: Dict[str, float] = {}
        event_starts: Dict[str, float] = {}

        for event in self.events:
            if event.event_type == 'start':
                event_starts[event.name] = event.timestamp
            elif event.event_type == 'stop':
                if event.name in event_starts:
                    duration = event.timestamp - event_starts.pop(event.name)
                    durations[event.name] = (
                        durations.get(event.name, 0.0) + duration
                    )

        return durations

    def print_summary(self) -> None:
        """Print aggregate durations.

        Only prints in 'default' mode; 'verbose' and 'debug' have already
        printed inline.
        """
        if self.verbosity == 'default':
            durations = self.get_aggregate_durations()
            if durations:
                print("\nTiming Summary:")
                for name, duration in sorted(durations.items()):
                    print(f"  {name}: {duration:.6f}s")


default_timelogger = TimeLogger(verbosity=None)
