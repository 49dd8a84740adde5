"""HyperLogLog cardinality estimator.

Answers the question: "How many distinct remote addresses hit this
server?" without storing every address. Memory is 2^p one-byte
registers no matter how long the log is, at the cost of roughly
1.04 / sqrt(2^p) standard error.

Each element is hashed to 64 bits. The top p bits pick a register;
the remaining 64 - p bits contribute a rank (leading zeros + 1). A
register keeps the largest rank it has ever seen, so registers only
grow. The harmonic mean of 2^-register across all registers gives the
raw estimate, which is then corrected at both ends of the range.

References:
    Flajolet et al., "HyperLogLog: the analysis of a near-optimal
    cardinality estimation algorithm", 2007.
"""

from __future__ import annotations

import array
import hashlib
import math

MIN_PRECISION = 4
MAX_PRECISION = 20

# alpha_m for m < 128; larger m uses 0.7213 / (1 + 1.079 / m)
_SMALL_M_ALPHA = {16: 0.673, 32: 0.697, 64: 0.709}

_TWO_POW_64 = 2.0 ** 64


def _hash64(element: bytes) -> int:
    """Hash bytes to a 64-bit integer using SHA-256 truncated."""
    digest = hashlib.sha256(element).digest()
    return int.from_bytes(digest[:8], "big")


def _leading_zeros_plus_one(value: int, max_bits: int) -> int:
    """Count leading zeros in the low `max_bits` bits, then add 1.

    The minimum return value is 1 (top bit set) and the maximum is
    max_bits + 1 (all bits zero).
    """
    if value == 0:
        return max_bits + 1
    return max_bits - value.bit_length() + 1


def _alpha(m: int) -> float:
    if m in _SMALL_M_ALPHA:
        return _SMALL_M_ALPHA[m]
    return 0.7213 / (1.0 + 1.079 / m)


class HyperLogLog:
    """HyperLogLog cardinality estimator.

    Parameters:
        p: Precision parameter. Uses 2^p registers. Higher p = more
           accuracy, more memory. Must be within 4..20.

    Typical precision values:
        p=10: 1024 registers, ~1 KB, ~3.25% error
        p=14: 16384 registers, ~16 KB, ~0.81% error
        p=20: 1048576 registers, ~1 MB, ~0.10% error
    """

    __slots__ = ("_p", "_m", "_alpha", "_registers")

    def __init__(self, p: int = 14) -> None:
        if not (MIN_PRECISION <= p <= MAX_PRECISION):
            raise ValueError(
                f"Precision p must be {MIN_PRECISION}..{MAX_PRECISION}, got {p}"
            )
        self._p = p
        self._m = 1 << p
        self._alpha = _alpha(self._m)
        self._registers: array.array | None = array.array("B", bytes(self._m))

    @property
    def precision(self) -> int:
        return self._p

    @property
    def num_registers(self) -> int:
        return self._m

    @property
    def registers(self) -> tuple[int, ...]:
        """Snapshot of the register array."""
        return tuple(self._live_registers())

    def _live_registers(self) -> array.array:
        if self._registers is None:
            raise ValueError("HyperLogLog has been destroyed")
        return self._registers

    def add(self, element: bytes) -> None:
        """Add an element. Re-adding a seen element changes nothing."""
        registers = self._live_registers()
        h = _hash64(element)
        # Top p bits select the register
        idx = h >> (64 - self._p)
        remaining = h & ((1 << (64 - self._p)) - 1)
        rank = _leading_zeros_plus_one(remaining, 64 - self._p)
        if rank > registers[idx]:
            registers[idx] = rank

    def estimate(self) -> float:
        """Estimate the number of distinct elements added.

        Applies linear counting when the raw estimate is at most 2.5m
        and some register is still zero, and the log correction when
        the raw estimate approaches the 64-bit hash space.
        """
        registers = self._live_registers()
        m = self._m
        indicator = math.fsum(2.0 ** (-r) for r in registers)
        raw = self._alpha * m * m / indicator

        if raw <= 2.5 * m:
            zeros = registers.count(0)
            if zeros > 0:
                return m * math.log(m / zeros)
            return raw

        if raw >= _TWO_POW_64:
            # every register saturated; the log correction is undefined
            return _TWO_POW_64
        if raw > _TWO_POW_64 / 30.0:
            return -_TWO_POW_64 * math.log(1.0 - raw / _TWO_POW_64)

        return raw

    def count(self) -> int:
        """Estimated cardinality rounded to the nearest integer."""
        return int(round(self.estimate()))

    def merge(self, other: HyperLogLog) -> None:
        """Merge another HyperLogLog into this one (union operation).

        After merging, this counter estimates the cardinality of the
        union of elements added to both counters.
        """
        if self._p != other._p:
            raise ValueError(
                f"Cannot merge HLLs with different precision: "
                f"{self._p} vs {other._p}"
            )
        mine = self._live_registers()
        theirs = other._live_registers()
        for i in range(self._m):
            if theirs[i] > mine[i]:
                mine[i] = theirs[i]

    def union(self, other: HyperLogLog) -> HyperLogLog:
        """Return a new HyperLogLog for the union, leaving both inputs intact."""
        result = HyperLogLog(self._p)
        result.merge(self)
        result.merge(other)
        return result

    def destroy(self) -> None:
        """Release register storage. Any later use raises ValueError."""
        self._registers = None

    def memory_bytes(self) -> int:
        """Approximate memory used by the registers."""
        return self._m if self._registers is not None else 0

    def standard_error(self) -> float:
        """Theoretical standard error for this precision."""
        return 1.04 / math.sqrt(self._m)
