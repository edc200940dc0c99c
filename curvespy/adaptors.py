import sys

import equinox as eqx

from .signal import Chain, Curve, Signal, as_signal


# ----------------------------------------------------------- #
# Combination of signals
# ----------------------------------------------------------- #
class Stack(Chain, Curve):
    """Evaluate two signals with the same input and return both outputs as a tuple.

    The stack is a chain if both signals are chains and a curve if both are curves.
    Its length is the smaller of both lengths and its domain the intersection of
    both domains.
    """

    left: Signal
    right: Signal

    def __init__(self, left, right):
        self.left = as_signal(left)
        self.right = as_signal(right)

    def eval(self, x):
        return self.left.eval(x), self.right.eval(x)

    def __len__(self):
        return min(len(self.left), len(self.right))

    def domain(self):
        start_left, end_left = self.left.domain()
        start_right, end_right = self.right.domain()
        return max(start_left, start_right), min(end_left, end_right)


class Composite(Chain, Curve):
    """Feed the output of `inner` into `outer`

    Length and domain are the ones of `inner`.
    """

    inner: Signal
    outer: Signal

    def __init__(self, inner, outer):
        self.inner = as_signal(inner)
        self.outer = as_signal(outer)

    def eval(self, x):
        return self.outer.eval(self.inner.eval(x))

    def __len__(self):
        return len(self.inner)

    def domain(self):
        return self.inner.domain()


# ----------------------------------------------------------- #
# Transformation of the input
# ----------------------------------------------------------- #
class TransformInput(Curve):
    """Affine transformation `x*multiplication + addition` applied before evaluation

    Parameters
    ----------
    inner : Curve
        Curve to evaluate.
    addition : float
        Value added after the multiplication.
    multiplication : float
        Non-zero scale of the input.
    """

    inner: Signal
    addition: float
    multiplication: float

    def __init__(self, inner, addition=0.0, multiplication=1.0):
        self.inner = inner
        self.addition = addition
        self.multiplication = multiplication

    @classmethod
    def normalized_to_domain(cls, inner, start, end):
        """Expose a curve defined over [0, 1] as a curve over [start, end]"""
        multiplication = 1.0 / (end - start)
        return cls(inner, -start * multiplication, multiplication)

    def eval(self, x):
        return self.inner.eval(x * self.multiplication + self.addition)

    def domain(self):
        start, end = self.inner.domain()
        return (
            (start - self.addition) / self.multiplication,
            (end - self.addition) / self.multiplication,
        )


class Slice(Curve):
    """Curve which runs through the sub-interval `[start, end]` of another curve

    The slice keeps the domain of the original curve. The start of that domain is
    mapped to `start` and its end to `end`.
    """

    transform: TransformInput

    def __init__(self, inner, start=None, end=None):
        inner_start, inner_end = inner.domain()
        start = inner_start if start is None else start
        end = inner_end if end is None else end
        scale = (end - start) / (inner_end - inner_start)
        self.transform = TransformInput(inner, start - inner_start * scale, scale)

    def eval(self, x):
        return self.transform.eval(x)

    def domain(self):
        return self.transform.inner.domain()


class Clamp(Curve):
    """Saturate every input to the domain of the inner curve"""

    inner: Curve

    def __init__(self, inner):
        self.inner = inner

    def eval(self, x):
        start, end = self.inner.domain()
        return self.inner.eval(min(max(x, start), end))

    def domain(self):
        return self.inner.domain()


# ----------------------------------------------------------- #
# Cyclic chains
# ----------------------------------------------------------- #
class Repeat(Chain):
    """Endless repetition of a chain"""

    inner: Chain

    def __init__(self, inner):
        self.inner = inner

    def eval(self, x):
        return self.inner.eval(x % len(self.inner))

    def __len__(self):
        return sys.maxsize


class Wrap(Chain):
    """Chain followed by its first `extra` elements again"""

    inner: Chain
    extra: int = eqx.field(static=True)

    def __init__(self, inner, extra):
        self.inner = inner
        self.extra = extra

    def eval(self, x):
        return self.inner.eval(x % len(self.inner))

    def __len__(self):
        return len(self.inner) + self.extra
