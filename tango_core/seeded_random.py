"""
Deterministic pseudo-random stream derived from a seed string.

The seed is folded into a signed 32-bit hash (h = h * 31 + code unit, over
UTF-16 code units) and its absolute value starts a linear congruential
generator with the Numerical Recipes constants. Every value in the stream is
state / 2**32, so the same seed always yields the same sequence.
"""
from typing import List, MutableSequence, TypeVar

T = TypeVar('T')

MODULUS = 2 ** 32
MULTIPLIER = 1664525
INCREMENT = 1013904223


def _utf16_code_units(text: str) -> List[int]:
    data = text.encode('utf-16-le')
    return [int.from_bytes(data[i:i + 2], 'little') for i in range(0, len(data), 2)]


def seed_hash(seed: str) -> int:
    """Signed 32-bit string hash of the seed (0 for the empty string)."""
    value = 0
    for code in _utf16_code_units(seed):
        value = ((value << 5) - value + code) % MODULUS
    if value >= MODULUS // 2:
        value -= MODULUS
    return value


class SeededRandom:
    """LCG stream; each consumer advances it one draw at a time."""

    def __init__(self, seed: str):
        self.seed = seed
        self.state: int = abs(seed_hash(seed))

    def random(self) -> float:
        """Next value in [0, 1)."""
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS

    def below(self, bound: int) -> int:
        """Integer in [0, bound) from one draw."""
        return int(self.random() * bound)

    def chance(self) -> bool:
        """One draw, True when it is strictly above one half."""
        return self.random() > 0.5

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place, walking backwards from the end."""
        for i in range(len(items) - 1, 0, -1):
            j = self.below(i + 1)
            items[i], items[j] = items[j], items[i]
