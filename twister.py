"""
Seedable 32-bit Mersenne Twister.

Deck completion and the annealing search each own one instance so that a
fixed pair of seeds reproduces a whole estimate.
"""

N = 624
M = 397
MASK_32 = 0xFFFFFFFF
UPPER_MASK = 0x80000000
LOWER_MASK = 0x7FFFFFFF
MATRIX_A = 0x9908B0DF

# 2 ** -31
FLOAT_SCALE = 4.656612873077392578125e-10


class Twister:
    """MT19937 with the classic linear-recurrence seeding."""

    def __init__(self, seed: int | None = None) -> None:
        self._state = [0] * N
        self._index = N
        if seed is not None:
            self.seed(seed)

    def seed(self, value: int) -> None:
        state = self._state
        state[0] = value & MASK_32
        for i in range(1, N):
            prev = state[i - 1]
            state[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & MASK_32
        self._generate()

    def _generate(self) -> None:
        state = self._state
        for i in range(N):
            y = (state[i] & UPPER_MASK) | (state[(i + 1) % N] & LOWER_MASK)
            value = state[(i + M) % N] ^ (y >> 1)
            if y & 1:
                value ^= MATRIX_A
            state[i] = value
        self._index = 0

    def next_uint32(self) -> int:
        if self._index >= N:
            self._generate()
        y = self._state[self._index]
        self._index += 1

        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & MASK_32

    def next_float_unit(self) -> float:
        """Uniform float in [0, 1) built from 31 output bits."""
        return (self.next_uint32() & LOWER_MASK) * FLOAT_SCALE

    def next_bounded_int(self, bound: int) -> int:
        """
        Uniform integer in [0, bound).

        Draws are masked to the smallest power of two covering bound - 1 and
        rejected when they land outside the range, so there is no modulo bias
        and fewer than two draws are needed on average.
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        mask = bound - 1
        mask |= mask >> 1
        mask |= mask >> 2
        mask |= mask >> 4
        mask |= mask >> 8
        mask |= mask >> 16

        while True:
            value = self.next_uint32() & mask
            if value < bound:
                return value
