"""Typed errors raised by the trust engine and the simulator.

Every error is local and synchronous. The operation that raises it has not
changed any state, so callers can simply drop the rejected event.
"""


class TrustEngineError(Exception):
    """Base class for all engine errors."""


class Overflow(TrustEngineError):
    """An integer result exceeded its fixed width."""


class Underflow(TrustEngineError):
    """An integer result fell below zero (or below its signed minimum)."""


class InvalidRating(TrustEngineError):
    """A rating outside 0..=100 was submitted."""

    def __init__(self, rating: int) -> None:
        super().__init__(f"Rating must be within 0..=100, got {rating}")
        self.rating = rating


class NonMonotonicTimestamp(TrustEngineError):
    """A payment timestamp is older than the last recorded payment."""

    def __init__(self, timestamp: int, last_payment_at: int) -> None:
        super().__init__(
            f"Payment timestamp {timestamp} precedes last payment at {last_payment_at}"
        )
        self.timestamp = timestamp
        self.last_payment_at = last_payment_at


class ZeroAmount(TrustEngineError):
    """A collateral event carried an amount of zero."""


class LockActive(TrustEngineError):
    """Withdrawal attempted before the stake lock expired."""

    def __init__(self, now: int, lock_expires_at: int) -> None:
        super().__init__(f"Stake locked until {lock_expires_at} (now={now})")
        self.now = now
        self.lock_expires_at = lock_expires_at


class InsufficientStake(TrustEngineError):
    """Withdrawal larger than the staked amount."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Requested {requested} but only {available} is staked")
        self.requested = requested
        self.available = available


class UnknownScenario(TrustEngineError):
    """No scenario with the given name exists in the library."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown scenario: {name!r}")
        self.name = name


class InvalidProfile(TrustEngineError):
    """An agent profile carries out-of-range behaviour parameters."""
