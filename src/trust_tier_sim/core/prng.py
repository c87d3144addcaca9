"""Portable seeded pseudo-random generator for the simulator.

Algorithm (documented so other implementations can reproduce it bit for bit):

1. State initialisation: ``state = splitmix64(seed)``; a zero state is
   replaced with the splitmix64 gamma constant.
2. Each draw is one xorshift64* step::

       x ^= x >> 12
       x ^= x << 25   (mod 2**64)
       x ^= x >> 27
       output = (x * 0x2545F4914F6CDD1D) mod 2**64

3. ``below(n)`` uses rejection sampling on the top of the 64-bit range so
   every residue is equally likely.

The simulator never touches the ``random`` module or OS entropy.
"""

_MASK64 = (1 << 64) - 1
_SPLITMIX64_GAMMA = 0x9E3779B97F4A7C15
_XORSHIFT_MULTIPLIER = 0x2545F4914F6CDD1D


def splitmix64(value: int) -> int:
    """One splitmix64 mixing round over a 64-bit value."""
    x = (value + _SPLITMIX64_GAMMA) & _MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


class XorShift64Star:
    """xorshift64* generator seeded through splitmix64.

    Attributes:
        seed: The integer seed the generator was created with.
        draws: Number of 64-bit outputs produced so far.
    """

    def __init__(self, seed: int) -> None:
        self.seed: int = seed
        self.draws: int = 0
        state = splitmix64(seed & _MASK64)
        self._state: int = state or _SPLITMIX64_GAMMA

    def next_u64(self) -> int:
        """Advance the generator and return the next 64-bit output."""
        x = self._state
        x ^= x >> 12
        x = (x ^ (x << 25)) & _MASK64
        x ^= x >> 27
        self._state = x
        self.draws += 1
        return (x * _XORSHIFT_MULTIPLIER) & _MASK64

    def below(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        limit = (_MASK64 + 1) - ((_MASK64 + 1) % bound)
        while True:
            value = self.next_u64()
            if value < limit:
                return value % bound

    def between(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]`` (inclusive)."""
        return low + self.below(high - low + 1)

    def chance_bps(self, probability_bps: int) -> bool:
        """Bernoulli draw with success probability ``probability_bps / 10_000``."""
        if probability_bps <= 0:
            return False
        if probability_bps >= 10_000:
            return True
        return self.below(10_000) < probability_bps
