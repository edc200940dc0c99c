import jax.numpy as jnp

import equinox as eqx

from .errors import WeightOfZero
from .signal import Chain, ConstChain, Curve, Signal
from .utils import lerp


# ----------------------------------------------------------- #
# Homogeneous coordinates
# ----------------------------------------------------------- #
class Homogeneous(eqx.Module):
    """Element lifted into homogeneous coordinates.

    A weighted element `e` with weight `w` is stored as `(e*w, w)`. Merging happens
    on both components independently and `project` divides them again, which turns
    every interpolation of homogeneous elements into its rational counterpart.
    A rational part of zero represents a point at infinity in the direction of `element`.

    Parameters
    ----------
    element : element
        Element already multiplied by its weight.
    rational : float
        Weight of the element.

    Examples
    --------
    >>> a = Homogeneous.weighted(1.0, 1.0)
    >>> b = Homogeneous.weighted(2.0, 4.0)
    >>> float(a.merge(b, 0.5).project())
    1.8
    """

    element: object
    rational: object

    def __init__(self, element, rational=1.0):
        self.element = element
        self.rational = rational

    @classmethod
    def infinity(cls, direction):
        """Point at infinity in the given direction"""
        return cls(direction, 0.0)

    @classmethod
    def weighted(cls, element, weight):
        """Lift `element` with `weight`, None if the weight is zero"""
        if weight == 0:
            return None
        return cls.weighted_unchecked(element, weight)

    @classmethod
    def weighted_or_infinite(cls, element, weight):
        """Lift `element` with `weight`, a zero weight gives a point at infinity"""
        if weight == 0:
            return cls.infinity(element)
        return cls.weighted_unchecked(element, weight)

    @classmethod
    def weighted_or_one(cls, element, weight):
        """Lift `element` with `weight`, a zero weight is replaced by one"""
        if weight == 0:
            return cls(element, 1.0)
        return cls.weighted_unchecked(element, weight)

    @classmethod
    def weighted_unchecked(cls, element, weight):
        return cls(element * weight, weight)

    @property
    def weight(self):
        return self.rational

    def is_infinite(self):
        return bool(self.rational == 0)

    def direction(self):
        """Direction of a point at infinity, None for finite points"""
        if self.is_infinite():
            return self.element
        return None

    def project(self):
        """Divide the element by its weight

        A point at infinity gives `inf` (or `nan`) components instead of raising.
        """
        return self.element / jnp.asarray(self.rational)

    def merge(self, other, factor):
        return Homogeneous(
            lerp(self.element, other.element, factor),
            lerp(self.rational, other.rational, factor),
        )

    def __add__(self, other):
        return Homogeneous(self.element + other.element, self.rational + other.rational)

    def __sub__(self, other):
        return Homogeneous(self.element - other.element, self.rational - other.rational)

    def __mul__(self, other):
        if isinstance(other, Homogeneous):
            return Homogeneous(self.element * other.element, self.rational * other.rational)
        return Homogeneous(self.element * other, self.rational * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Homogeneous):
            return Homogeneous(self.element / other.element, self.rational / other.rational)
        return Homogeneous(self.element / other, self.rational / other)


def into_weight(value):
    """Convert a value into a homogeneous element

    Homogeneous elements are returned unchanged. An `(element, weight)` pair is
    lifted with `Homogeneous.weighted_or_infinite` and any other value gets a weight of one.
    """
    if isinstance(value, Homogeneous):
        return value
    if isinstance(value, (tuple, list)) and len(value) == 2:
        element, weight = value
        return Homogeneous.weighted_or_infinite(element, weight)
    return Homogeneous(value)


# ----------------------------------------------------------- #
# Lifting and projection of signals
# ----------------------------------------------------------- #
class Weights(ConstChain):
    """Chain of homogeneous elements created lazily from a chain of weighted values

    Parameters
    ----------
    inner : Chain
        Chain of `(element, weight)` pairs, homogeneous elements or plain elements.
    allow_infinite : bool
        If False, raise `WeightOfZero` with the index of the first element of weight zero.
    """

    inner: Chain

    def __init__(self, inner, allow_infinite=True):
        self.inner = inner
        if not allow_infinite:
            for index in range(len(inner)):
                if into_weight(inner.eval(index)).is_infinite():
                    raise WeightOfZero(index)

    def eval(self, x):
        return into_weight(self.inner.eval(x))

    def __len__(self):
        return len(self.inner)


class Weighted(Chain, Curve):
    """Project every homogeneous output of a signal back to an element"""

    inner: Signal

    def __init__(self, inner):
        self.inner = inner

    def eval(self, x):
        return self.inner.eval(x).project()

    def __len__(self):
        return len(self.inner)

    def domain(self):
        return self.inner.domain()
