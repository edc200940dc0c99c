"""Easing functions which reshape the factor of an interpolation.

Every function maps [0, 1] onto [0, 1] with `f(0) = 0` and `f(1) = 1`.
They can be used as plain callables or wrapped in `FuncEase` to obtain a curve.
"""

import equinox as eqx

from .signal import Curve


# ----------------------------------------------------------- #
# Plain easing functions
# ----------------------------------------------------------- #
def identity(x):
    return x


def flip(x):
    """Mirror the factor, `1 - x`"""
    return 1.0 - x


def smoothstart(x, n=2):
    """Ease in with the power `x**n`"""
    return x**n


def smoothend(x, n=2):
    """Ease out with the power `1 - (1-x)**n`"""
    return 1.0 - (1.0 - x) ** n


def smoothstep(x):
    """Cubic ease in and out, `3x^2 - 2x^3`"""
    return x * x * (3.0 - 2.0 * x)


def smootherstep(x):
    """Quintic ease in and out with vanishing first and second derivatives at both ends"""
    return x * x * x * (x * (x * 6.0 - 15.0) + 10.0)


# ----------------------------------------------------------- #
# Easing curves
# ----------------------------------------------------------- #
class FuncEase(Curve):
    """Curve over [0, 1] defined by an easing function"""

    function: object = eqx.field(static=True)

    def __init__(self, function):
        self.function = function

    def eval(self, x):
        return self.function(x)

    def domain(self):
        return 0.0, 1.0


class Identity(Curve):
    """Easing which returns the factor unchanged"""

    def eval(self, x):
        return x

    def domain(self):
        return 0.0, 1.0


class Plateau(Curve):
    """Smoothstep easing with flat sections at both ends

    The first `strength/2` of the input return 0 and the last `strength/2` return 1.
    In between, the input is rescaled to [0, 1] and passed through `smoothstep`.

    Parameters
    ----------
    strength : float
        Combined length of both flat sections, between 0 and 1.
        A strength of 0 is `smoothstep` and a strength of 1 a step at 0.5.
    """

    min: float
    max: float

    def __init__(self, strength):
        if not 0.0 <= strength <= 1.0:
            raise ValueError(f"The strength of a plateau has to be within [0, 1], got {strength}")
        self.min = strength / 2.0
        self.max = 1.0 - strength / 2.0

    def eval(self, x):
        if x <= self.min:
            return smoothstep(0.0)
        if x >= self.max:
            return smoothstep(1.0)
        return smoothstep((x - self.min) / (self.max - self.min))

    def domain(self):
        return 0.0, 1.0
