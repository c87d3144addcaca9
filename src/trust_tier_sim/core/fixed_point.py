"""Overflow-checked integer arithmetic for scores and multipliers.

All percentages are integers scaled by 100 (multipliers) or 10_000 (basis
points). Nothing in the scoring path touches floating point, so two
implementations fed the same integers produce the same bits.

Checked operations raise ``Overflow`` / ``Underflow`` instead of wrapping.
Saturating operations clamp to the representable range and never raise.
"""

from trust_tier_sim.core.errors import Overflow, Underflow

BPS_SCALE = 10_000
MULTIPLIER_SCALE = 100

U8_MAX = (1 << 8) - 1
U16_MAX = (1 << 16) - 1
U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def check_u64(value: int, name: str = "value") -> int:
    """Validate that ``value`` fits an unsigned 64-bit integer."""
    if value < 0:
        raise Underflow(f"{name} is negative: {value}")
    if value > U64_MAX:
        raise Overflow(f"{name} exceeds u64: {value}")
    return value


def check_u16(value: int, name: str = "value") -> int:
    """Validate that ``value`` fits an unsigned 16-bit integer."""
    if value < 0:
        raise Underflow(f"{name} is negative: {value}")
    if value > U16_MAX:
        raise Overflow(f"{name} exceeds u16: {value}")
    return value


def check_i64(value: int, name: str = "value") -> int:
    """Validate that ``value`` fits a signed 64-bit integer."""
    if value < I64_MIN:
        raise Underflow(f"{name} below i64 minimum: {value}")
    if value > I64_MAX:
        raise Overflow(f"{name} exceeds i64: {value}")
    return value


def check_bps(value: int, name: str = "bps") -> int:
    """Validate a basis-point quantity in 0..=10_000."""
    if value < 0:
        raise Underflow(f"{name} is negative: {value}")
    if value > BPS_SCALE:
        raise Overflow(f"{name} exceeds {BPS_SCALE}: {value}")
    return value


def add(a: int, b: int) -> int:
    """u64 addition that raises ``Overflow`` instead of wrapping."""
    result = check_u64(a, "a") + check_u64(b, "b")
    if result > U64_MAX:
        raise Overflow(f"{a} + {b} overflows u64")
    return result


def sub(a: int, b: int) -> int:
    """u64 subtraction that raises ``Underflow`` below zero."""
    check_u64(a, "a")
    check_u64(b, "b")
    if b > a:
        raise Underflow(f"{a} - {b} underflows u64")
    return a - b


def mul_scaled(a: int, b: int, scale: int) -> int:
    """Return ``a * b / scale`` rounded down, checked against u64."""
    check_u64(a, "a")
    check_u64(b, "b")
    if scale <= 0:
        raise Overflow(f"scale must be positive, got {scale}")
    result = (a * b) // scale
    if result > U64_MAX:
        raise Overflow(f"{a} * {b} / {scale} overflows u64")
    return result


def div_scaled(a: int, b: int, scale: int) -> int:
    """Return ``a * scale / b`` rounded down, checked against u64.

    Division by zero has no bounded result and is reported as ``Overflow``.
    """
    check_u64(a, "a")
    check_u64(b, "b")
    if b == 0:
        raise Overflow(f"division of {a} by zero")
    result = (a * scale) // b
    if result > U64_MAX:
        raise Overflow(f"{a} * {scale} / {b} overflows u64")
    return result


def saturating_add(a: int, b: int) -> int:
    """u64 addition clamped at ``U64_MAX``."""
    return min(check_u64(a, "a") + check_u64(b, "b"), U64_MAX)


def saturating_sub(a: int, b: int) -> int:
    """u64 subtraction clamped at zero."""
    return max(check_u64(a, "a") - check_u64(b, "b"), 0)


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def mul_div_trunc(value: int, numerator: int, denominator: int) -> int:
    """Signed ``value * numerator / denominator`` rounded toward zero.

    Python's ``//`` floors, which would bias negative EMA steps downwards;
    truncation keeps positive and negative steps symmetric.
    """
    if denominator <= 0:
        raise Overflow(f"denominator must be positive, got {denominator}")
    product = value * numerator
    quotient = abs(product) // denominator
    return quotient if product >= 0 else -quotient
