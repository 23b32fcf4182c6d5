"""A circuit breaker guarding calls to external dependencies."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(enum.Enum):
    """State of a circuit breaker."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(frozen=True)
class CircuitBreakerConfig:
    """Thresholds and timings; durations are in seconds."""

    failure_threshold: int = 5
    success_threshold: int = 3
    timeout: float = 60.0
    window: float = 300.0


class CircuitBreakerError(Exception):
    """Base of the errors a circuit breaker raises."""


class CircuitOpenError(CircuitBreakerError):
    """The circuit is open and the call was refused."""

    def __init__(self) -> None:
        super().__init__("Circuit breaker is open")


class CallFailedError(CircuitBreakerError):
    """The guarded call raised; the original exception is in ``error``."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Call failed: {error}")
        self.error = error


class CircuitBreaker:
    """Fails fast after repeated failures and probes for recovery after a timeout."""

    def __init__(self, name: str, config: CircuitBreakerConfig | None = None) -> None:
        self.name = name
        self.config = config if config is not None else CircuitBreakerConfig()
        now = time.monotonic()
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time = now
        self._last_window_reset = now

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        """Await ``func()`` under protection of the breaker."""
        if self._is_open():
            logger.debug("Circuit breaker %s is open, failing fast", self.name)
            raise CircuitOpenError()

        start = time.monotonic()
        try:
            value = await func()
        except Exception as exc:
            self._record_failure()
            logger.warning(
                "Circuit breaker %s failure in %.3fs", self.name, time.monotonic() - start
            )
            raise CallFailedError(exc) from exc
        self._record_success()
        logger.debug("Circuit breaker %s success in %.3fs", self.name, time.monotonic() - start)
        return value

    def _is_open(self) -> bool:
        if self._state is not CircuitState.OPEN:
            return False
        if time.monotonic() - self._last_failure_time > self.config.timeout:
            self._state = CircuitState.HALF_OPEN
            logger.info("Circuit breaker %s moved to half-open", self.name)
            return False
        return True

    def _record_success(self) -> None:
        if self._state is CircuitState.HALF_OPEN:
            self._success_count += 1
            if self._success_count >= self.config.success_threshold:
                self._state = CircuitState.CLOSED
                self._failure_count = 0
                self._success_count = 0
                logger.info("Circuit breaker %s closed after recovery", self.name)
        elif self._state is CircuitState.CLOSED:
            self._failure_count = 0
        else:
            logger.debug("Success recorded for open circuit breaker %s", self.name)

    def _record_failure(self) -> None:
        now = time.monotonic()
        if now - self._last_window_reset > self.config.window:
            self._failure_count = 0
            self._last_window_reset = now
            logger.debug("Circuit breaker %s window reset", self.name)

        self._failure_count += 1
        self._last_failure_time = now

        if (
            self._state is CircuitState.CLOSED
            and self._failure_count >= self.config.failure_threshold
        ):
            self._state = CircuitState.OPEN
            logger.warning(
                "Circuit breaker %s opened after %d failures", self.name, self._failure_count
            )

    @property
    def state(self) -> CircuitState:
        """Current state."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Failures counted in the current window."""
        return self._failure_count

    @property
    def success_count(self) -> int:
        """Successes counted while half-open."""
        return self._success_count

    def force_open(self) -> None:
        """Put the circuit into the open state."""
        self._state = CircuitState.OPEN

    def force_close(self) -> None:
        """Close the circuit and clear the counters."""
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0

    def __repr__(self) -> str:
        return f"CircuitBreaker(name={self.name!r}, state={self._state.value})"