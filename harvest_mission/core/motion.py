"""Single-cell forward motion with bounded obstruction recovery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .pose import Pose
from .runtime import FuelLevel, HarvestRuntime


class ObstructionError(RuntimeError):
    """Raised when a forward step keeps failing past the retry budget."""

    def __init__(self, pose: Pose, attempts: int) -> None:
        super().__init__(
            f"Blocked moving {pose.heading.name} from ({pose.x}, {pose.z}) after {attempts} attempts"
        )
        self.pose = pose.snapshot()
        self.attempts = attempts


class FuelExhaustedError(RuntimeError):
    """Raised when a step fails because the agent has no fuel left."""

    def __init__(self, pose: Pose) -> None:
        super().__init__(f"Out of fuel at ({pose.x}, {pose.z})")
        self.pose = pose.snapshot()


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: Optional[int] = 64  # None retries forever
    delay_s: float = 0.15
    backoff: float = 1.0
    max_delay_s: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1 (or None for unbounded)")
        if self.delay_s < 0 or self.max_delay_s < 0:
            raise ValueError("retry delays cannot be negative")
        if self.backoff < 1.0:
            raise ValueError("backoff multiplier must be >= 1.0")

    def delays(self) -> Iterator[float]:
        """Yield the pause before each retry; stops once the budget is spent."""
        delay = self.delay_s
        retries = 0
        while self.max_attempts is None or retries < self.max_attempts - 1:
            yield min(delay, self.max_delay_s)
            delay *= self.backoff
            retries += 1


class MotionPrimitive:
    def __init__(self, runtime: HarvestRuntime, pose: Pose, policy: Optional[RetryPolicy] = None) -> None:
        self._runtime = runtime
        self._actuator = runtime.actuator
        self._pose = pose
        self._policy = policy or RetryPolicy()
        self.steps = 0
        self.obstructions = 0
        self.blocked_s = 0.0  # runtime-clock time spent clearing obstructions

    def forward(self) -> None:
        attempts = 1
        delays = self._policy.delays()
        blocked_since: Optional[float] = None
        while not self._actuator.step_forward():
            if FuelLevel.parse(self._actuator.fuel_level()).exhausted:
                self._runtime.logger.error(
                    "Step failed with an empty fuel tank at (%d, %d)" % (self._pose.x, self._pose.z)
                )
                raise FuelExhaustedError(self._pose)
            if blocked_since is None:
                blocked_since = self._runtime.now()
            self.obstructions += 1
            delay = next(delays, None)
            if delay is None:
                waited = self._record_blocked(blocked_since)
                self._runtime.logger.error(
                    "Obstruction not cleared after %d attempts (%.2fs) at (%d, %d) heading %s"
                    % (attempts, waited, self._pose.x, self._pose.z, self._pose.heading.name)
                )
                raise ObstructionError(self._pose, attempts)
            self._runtime.logger.debug(
                "Obstruction ahead of (%d, %d), clearing (attempt %d, retry in %.2fs)"
                % (self._pose.x, self._pose.z, attempts, delay)
            )
            self._actuator.clear_ahead()
            self._actuator.attack_ahead()
            self._runtime.sleep(delay)
            attempts += 1
        if blocked_since is not None:
            waited = self._record_blocked(blocked_since)
            self._runtime.logger.info(
                "Cleared obstruction ahead of (%d, %d) after %d attempts (%.2fs)"
                % (self._pose.x, self._pose.z, attempts, waited)
            )
        self._pose.advance()
        self.steps += 1

    def _record_blocked(self, since: float) -> float:
        waited = max(0.0, self._runtime.now() - since)
        self.blocked_s += waited
        return waited


__all__ = ["RetryPolicy", "MotionPrimitive", "ObstructionError", "FuelExhaustedError"]
