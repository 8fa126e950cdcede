"""
Paw check: is the ground cool enough for a dog's paws?

Two measurement modes:

- **Timed hold test**: place the back of your hand on the pavement. If you can
  hold it there for 7 seconds the surface is most likely under 125 F. The test
  is a small state machine advanced one tick per second::

      idle --start--> running --tick x7--> completed   (safe, proxy 120 F)
                         |
                         +----abort------> aborted     (too hot, proxy 130 F)

  Stopping early is the "too hot" answer, not an error.

- **Direct reading**: type in the value from an infrared thermometer.

``run_hold_test`` drives the state machine from a ``Clock``; tests use a fake
clock so no real time passes.
"""

from __future__ import annotations

import logging
import math
import time
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from dogwalk_safety.errors import ParseError, PawCheckStateError
from dogwalk_safety.schemas import PawMethod, PawVerdict

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# Surfaces at or above this temperature burn paws
SAFE_SURFACE_MAX_F = 125.0

HOLD_SECONDS = 7
TICK_SECONDS = 1.0

# Proxy surface temperatures reported by the hold test
HOLD_PASSED_SURFACE_F = 120.0
HOLD_FAILED_SURFACE_F = 130.0


class HoldState(StrEnum):
    """States of the timed hold test."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class Clock(Protocol):
    """Anything that can wait for one tick."""

    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Wall clock backed by ``time.sleep``."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


# ---------------------------------------------------------------------------
# Timed hold test
# ---------------------------------------------------------------------------


class TimedHoldTest:
    """Countdown state machine for the 7-second hand test."""

    def __init__(self, threshold: int = HOLD_SECONDS) -> None:
        self.threshold = threshold
        self.state = HoldState.IDLE
        self.count = 0
        self.verdict: PawVerdict | None = None

    @property
    def is_running(self) -> bool:
        return self.state is HoldState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state in (HoldState.COMPLETED, HoldState.ABORTED)

    def start(self) -> None:
        """Begin a new test. Allowed from idle or after a previous test finished."""
        if self.is_running:
            msg = "Hold test is already running"
            raise PawCheckStateError(msg)
        self.state = HoldState.RUNNING
        self.count = 0
        self.verdict = None

    def tick(self) -> PawVerdict | None:
        """Advance one second. Returns the verdict when the threshold is reached."""
        if not self.is_running:
            msg = f"Cannot tick a hold test that is {self.state}"
            raise PawCheckStateError(msg)
        self.count += 1
        if self.count >= self.threshold:
            return self._finish(HoldState.COMPLETED, HOLD_PASSED_SURFACE_F, is_safe=True)
        return None

    def abort(self) -> PawVerdict:
        """Stop early: the surface was too hot to keep a hand on."""
        if not self.is_running:
            msg = f"Cannot abort a hold test that is {self.state}"
            raise PawCheckStateError(msg)
        logger.debug("Hold test aborted after %d/%d ticks", self.count, self.threshold)
        return self._finish(HoldState.ABORTED, HOLD_FAILED_SURFACE_F, is_safe=False)

    def _finish(self, state: HoldState, surface_temp_f: float, *, is_safe: bool) -> PawVerdict:
        self.state = state
        self.count = 0
        self.verdict = PawVerdict(
            surface_temp_f=surface_temp_f,
            method=PawMethod.TIMED_HOLD_TEST,
            is_safe=is_safe,
        )
        return self.verdict


def run_hold_test(
    test: TimedHoldTest,
    clock: Clock | None = None,
    *,
    should_abort: Callable[[int], bool] | None = None,
    on_tick: Callable[[int], None] | None = None,
) -> PawVerdict:
    """Run a hold test to completion, one tick per second.

    Args:
        test: The state machine to drive. Started here if idle or finished.
        clock: Tick source (default: ``SystemClock``).
        should_abort: Polled before every tick with the current count; returning
            True stops the test as "too hot".
        on_tick: Called with the new count after every tick that did not finish
            the test (e.g. to redraw ``3/7``).

    Returns:
        The verdict. A ``KeyboardInterrupt`` while waiting also aborts the test.
    """
    clock = clock or SystemClock()
    if not test.is_running:
        test.start()

    try:
        while True:
            if should_abort is not None and should_abort(test.count):
                return test.abort()
            clock.sleep(TICK_SECONDS)
            verdict = test.tick()
            if verdict is not None:
                return verdict
            if on_tick is not None:
                on_tick(test.count)
    except KeyboardInterrupt:
        return test.abort()


# ---------------------------------------------------------------------------
# Direct reading
# ---------------------------------------------------------------------------


def parse_temperature(raw_text: str) -> float:
    """Parse a typed surface temperature.

    Raises:
        ParseError: Text is empty, not a number, or not finite.
    """
    text = raw_text.strip()
    try:
        value = float(text)
    except ValueError:
        msg = f"Not a temperature: {raw_text!r}"
        raise ParseError(msg) from None
    if not math.isfinite(value):
        msg = f"Temperature must be a finite number: {raw_text!r}"
        raise ParseError(msg)
    return value


def verdict_for_reading(surface_temp_f: float) -> PawVerdict:
    return PawVerdict(
        surface_temp_f=surface_temp_f,
        method=PawMethod.DIRECT_READING,
        is_safe=surface_temp_f < SAFE_SURFACE_MAX_F,
    )


class DirectReading:
    """Input buffer for a thermometer reading."""

    def __init__(self) -> None:
        self.buffer = ""

    def submit(self, raw_text: str | None = None) -> PawVerdict:
        """Turn the typed value into a verdict.

        Args:
            raw_text: Text to submit; defaults to the current buffer.

        Raises:
            ParseError: The text is not a finite number. The buffer is kept so
                the user can correct it.
        """
        if raw_text is not None:
            self.buffer = raw_text
        verdict = verdict_for_reading(parse_temperature(self.buffer))
        self.buffer = ""
        return verdict


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class PawCheckEvaluator:
    """One paw-check session in either mode.

    The mode is fixed when the check starts; the verdict of the last finished
    check stays available on ``verdict``.
    """

    def __init__(self, threshold: int = HOLD_SECONDS) -> None:
        self.mode: PawMethod | None = None
        self.hold_test = TimedHoldTest(threshold)
        self.reading = DirectReading()
        self.verdict: PawVerdict | None = None

    @property
    def count(self) -> int:
        """Seconds held so far in the current hold test."""
        return self.hold_test.count

    def start(self, mode: PawMethod) -> None:
        if self.hold_test.is_running:
            msg = "A hold test is in progress; abort it before switching modes"
            raise PawCheckStateError(msg)
        self.mode = PawMethod(mode)
        self.verdict = None
        if self.mode is PawMethod.TIMED_HOLD_TEST:
            self.hold_test.start()
        else:
            self.reading.buffer = ""

    def tick(self) -> PawVerdict | None:
        verdict = self.hold_test.tick()
        if verdict is not None:
            self.verdict = verdict
        return verdict

    def abort(self) -> PawVerdict:
        self.verdict = self.hold_test.abort()
        return self.verdict

    def run(
        self,
        clock: Clock | None = None,
        *,
        should_abort: Callable[[int], bool] | None = None,
        on_tick: Callable[[int], None] | None = None,
    ) -> PawVerdict:
        """Start (if needed) and drive a hold test until it finishes."""
        if not self.hold_test.is_running:
            self.start(PawMethod.TIMED_HOLD_TEST)
        self.verdict = run_hold_test(
            self.hold_test, clock, should_abort=should_abort, on_tick=on_tick
        )
        return self.verdict

    def submit(self, raw_text: str) -> PawVerdict:
        """Judge a thermometer reading. Switches to direct-reading mode if needed."""
        if self.hold_test.is_running:
            msg = "A hold test is in progress; abort it before submitting a reading"
            raise PawCheckStateError(msg)
        self.mode = PawMethod.DIRECT_READING
        self.verdict = self.reading.submit(raw_text)
        return self.verdict

