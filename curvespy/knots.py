import abc
import logging
import math

import equinox as eqx
import jax.numpy as jnp

from .errors import NotSorted, TooFewElements
from .signal import Chain, ConstChain, Elements

logger = logging.getLogger(__name__)


# ----------------------------------------------------------- #
# Sorted chains and their ordered search
# ----------------------------------------------------------- #
class SortedChain(Chain):
    """Chain whose values are non-decreasing.

    Provides the ordered search used by the interpolation kernels to locate the
    knots surrounding a parameter value. The default implementations use bisection,
    chains with more structure (such as equidistant knots) override them with
    constant time arithmetic.

    Examples
    --------
    >>> knots = as_sorted([0.0, 0.1, 0.2, 0.7, 0.7, 0.7, 0.8, 1.0])
    >>> knots.strict_upper_bound(0.7)
    6
    >>> knots.upper_border(0.15)
    (1, 2)
    """

    def strict_upper_bound_clamped(self, x, lo, hi):
        """Smallest index `i` in `[lo, hi)` with `eval(i) > x`, or `hi` if there is none

        Only the indices from `lo` to `hi` are inspected, so the result always lies in `[lo, hi]`.
        """
        pointer = lo
        count = hi - lo
        while count > 0:
            step = count // 2
            sample = pointer + step
            if x >= self.eval(sample):
                pointer = sample + 1
                count -= step + 1
            else:
                count = step
        return pointer

    def strict_upper_bound(self, x):
        """Smallest index `i` with `eval(i) > x`, or `len` if all values are smaller or equal"""
        return self.strict_upper_bound_clamped(x, 0, len(self))

    def upper_border(self, x):
        """Indices `(i-1, i)` of the knots surrounding `x`

        Both indices are valid and distinct as long as the chain has at least two values.
        If values equal to `x` exist, the border starts at the last of them.
        Values outside of the knots give the first or last pair respectively.
        """
        index = self.strict_upper_bound(x)
        length = len(self)
        if index == length:
            return length - 2, length - 1
        if index == 0:
            return 0, 1
        return index - 1, index

    def factor(self, lo, hi, x):
        """Position of `x` relative to the knots `lo` and `hi`, zero if both knots are equal"""
        start = self.eval(lo)
        width = self.eval(hi) - start
        if width == 0:
            return 0.0
        return (x - start) / width

    def upper_border_with_factor(self, x):
        """Return `(lo, hi, factor)` of `upper_border` and `factor` in one call"""
        lo, hi = self.upper_border(x)
        return lo, hi, self.factor(lo, hi, x)


class Sorted(SortedChain):
    """Chain of knots which has been checked to be sorted

    Parameters
    ----------
    inner : Chain
        Knot values.
    validate : bool
        Check the order of the values. Raise `NotSorted` with the index of the first
        decreasing (or NaN) pair of values.
    """

    inner: Chain

    def __init__(self, inner, validate=True):
        self.inner = inner
        if validate:
            values = jnp.asarray([inner.eval(i) for i in range(len(inner))], dtype=float)
            decreasing = ~(values[1:] >= values[:-1])
            if jnp.any(decreasing):
                index = int(jnp.argmax(decreasing))
                logger.debug("Knots are decreasing at index %d: %s", index, values)
                raise NotSorted(index)

    @classmethod
    def new_unchecked(cls, inner):
        return cls(inner, validate=False)

    def eval(self, x):
        return self.inner.eval(x)

    def __len__(self):
        return len(self.inner)


def as_sorted(knots, validate=True):
    """Convert knots into a sorted chain

    Sorted chains are returned unchanged, other chains are checked and any other
    sequence or array is converted to a chain of floats first.
    """
    if isinstance(knots, SortedChain):
        return knots
    if not isinstance(knots, Chain):
        knots = Elements(jnp.ravel(jnp.asarray(knots, dtype=float)).tolist())
    return Sorted(knots, validate)


# ----------------------------------------------------------- #
# Equidistant knots
# ----------------------------------------------------------- #
class UniformSortedChain(SortedChain):
    """Sorted chain with equally spaced values, searched in constant time"""

    @abc.abstractmethod
    def scaled(self, x):
        """Position of `x` measured in steps from the first value"""

    def strict_upper_bound(self, x):
        length = len(self)
        if x < self.eval(0):
            return 0
        if x >= self.eval(length - 1):
            return length
        return min(length, math.floor(self.scaled(x)) + 1)

    def strict_upper_bound_clamped(self, x, lo, hi):
        if x < self.eval(lo):
            return lo
        if x >= self.eval(len(self) - 1):
            return hi
        return min(hi, math.floor(self.scaled(x)) + 1)

    def upper_border(self, x):
        length = len(self)
        if x < self.eval(0):
            return 0, 1
        if x >= self.eval(length - 1):
            return length - 2, length - 1
        lo = min(math.floor(self.scaled(x)), length - 2)
        return lo, lo + 1


class Equidistant(UniformSortedChain, ConstChain):
    """Knots `offset + i*step` for `i` in `0..length`

    Parameters
    ----------
    length : int
        Number of knots.
    step : float
        Distance between consecutive knots.
    offset : float
        Value of the first knot.
    """

    length: int = eqx.field(static=True)
    step: float
    offset: float

    def __init__(self, length, step, offset=0.0):
        self.length = length
        self.step = step
        self.offset = offset

    @classmethod
    def normalized(cls, length):
        """Knots from 0.0 to 1.0"""
        return cls(length, 1.0 / (length - 1), 0.0)

    @classmethod
    def with_domain(cls, length, start, end):
        """Knots from `start` to `end`, both included"""
        return cls(length, (end - start) / (length - 1), start)

    @classmethod
    def with_step(cls, length, start, step):
        """Knots starting at `start`, `step` apart"""
        return cls(length, step, start)

    def eval(self, x):
        return self.step * x + self.offset

    def __len__(self):
        return self.length

    def scaled(self, x):
        return (x - self.offset) / self.step


class ConstEquidistant(UniformSortedChain, ConstChain):
    """Knots `i/(length-1)` for `i` in `0..length`, spanning exactly [0, 1]"""

    length: int = eqx.field(static=True)

    def __init__(self, length):
        self.length = length

    def eval(self, x):
        return x / (self.length - 1)

    def __len__(self):
        return self.length

    def scaled(self, x):
        return x * (self.length - 1)


# ----------------------------------------------------------- #
# Padding and trimming of knots
# ----------------------------------------------------------- #
class BorderBuffer(SortedChain):
    """Repeat the first and the last value of a sorted chain `n` additional times

    The resulting chain has `len(inner) + 2n` values. Searches are delegated to the
    inner chain and mapped back.
    """

    inner: SortedChain
    n: int = eqx.field(static=True)

    def __init__(self, inner, n):
        self.inner = inner
        self.n = n

    def _map_into(self, index):
        if index < self.n:
            return 0
        if index - self.n >= len(self.inner):
            return len(self.inner)
        return index - self.n

    def _map_from(self, index):
        if index == len(self.inner):
            return len(self)
        if index == 0:
            return 0
        return index + self.n

    def eval(self, x):
        clamped = min(max(x, self.n), len(self.inner) + self.n - 1)
        return self.inner.eval(clamped - self.n)

    def __len__(self):
        return len(self.inner) + 2 * self.n

    def strict_upper_bound_clamped(self, x, lo, hi):
        # Ranges lying completely inside one of the padded ends cannot be mapped
        if hi <= self.n or lo >= self.n + len(self.inner):
            return super().strict_upper_bound_clamped(x, lo, hi)
        index = self.inner.strict_upper_bound_clamped(
            x, self._map_into(lo), self._map_into(hi)
        )
        return max(lo, min(hi, self._map_from(index)))

    def strict_upper_bound(self, x):
        return self._map_from(self.inner.strict_upper_bound(x))


class BorderDeletion(SortedChain):
    """Drop the first and the last value of a sorted chain"""

    inner: SortedChain

    def __init__(self, inner):
        if len(inner) < 2:
            raise TooFewElements(len(inner))
        self.inner = inner

    def eval(self, x):
        return self.inner.eval(x + 1)

    def __len__(self):
        return len(self.inner) - 2

    def strict_upper_bound_clamped(self, x, lo, hi):
        return self.inner.strict_upper_bound_clamped(x, lo + 1, hi + 1) - 1

    def strict_upper_bound(self, x):
        return self.strict_upper_bound_clamped(x, 0, len(self))
