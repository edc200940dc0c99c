"""Exceptions raised while constructing curves.

Errors are grouped into one umbrella per kernel (`LinearError`, `BezierError`,
`BSplineError`) so that callers can catch either broadly or specifically.
Errors shared by several kernels inherit from every umbrella that can raise them.
"""


# ----------------------------------------------------------- #
# Umbrella classes
# ----------------------------------------------------------- #
class CurveError(ValueError):
    """Base class of all curve construction errors."""


class LinearError(CurveError):
    """Error raised while constructing a linear interpolation."""


class BezierError(CurveError):
    """Error raised while constructing a Bézier curve."""


class BSplineError(CurveError):
    """Error raised while constructing a B-spline curve."""


class BuilderStateError(TypeError):
    """A builder method was called in a stage where it is not available."""


# ----------------------------------------------------------- #
# Structural errors
# ----------------------------------------------------------- #
class Empty(LinearError, BezierError, BSplineError):
    """No elements were given."""

    def __init__(self):
        super().__init__("No elements were given.")


class TooFewElements(LinearError, BSplineError):
    """Fewer than two elements were given."""

    def __init__(self, found):
        self.found = found
        super().__init__(
            f"To few elements given for the interpolation. {found} elements were given, "
            "but at least 2 are necessary."
        )


class TooFewKnots(BSplineError):
    """Fewer knots than the construction mode requires were given."""

    def __init__(self, found, required=2):
        self.found = found
        self.required = required
        super().__init__(
            f"To few knots given for the interpolation. {found} knots were given, "
            f"but at least {required} are necessary."
        )


class KnotElementInequality(LinearError):
    def __init__(self, elements, knots):
        self.elements = elements
        self.knots = knots
        super().__init__(
            "There has to be as many knots as elements, however we found "
            f"{elements} elements and {knots} knots."
        )


class IncongruousElementsKnots(BSplineError):
    """The number of knots does not result in a valid degree for the given elements."""

    def __init__(self, elements, knots):
        self.elements = elements
        self.knots = knots
        super().__init__(
            f"{knots} knots are not compatible with {elements} elements. "
            "The resulting degree has to be at least 1 and less than the number of elements."
        )


class IncongruousElementsDegree(BSplineError):
    """The requested degree is too high for the number of elements."""

    def __init__(self, elements, degree):
        self.elements = elements
        self.degree = degree
        super().__init__(
            f"A curve of degree {degree} needs at least {degree + 1} elements, "
            f"however only {elements} elements were given."
        )


class InvalidDegree(BSplineError):
    def __init__(self, degree):
        self.degree = degree
        super().__init__(
            f"The degree of the resulting curve is {degree} and such not valid. "
            "Only strictly positive degrees less than the number of elements are allowed."
        )


class NotSorted(LinearError, BSplineError):
    """Knots are decreasing (or not comparable) somewhere."""

    def __init__(self, index):
        self.index = index
        super().__init__(
            f"Given knots are not sorted. From index {index} to {index + 1} "
            "we found decreasing values."
        )


# ----------------------------------------------------------- #
# Resource and weight errors
# ----------------------------------------------------------- #
class TooSmallWorkspace(BezierError, BSplineError):
    """The workspace cannot hold all values needed during evaluation."""

    def __init__(self, found, required):
        self.found = found
        self.required = required
        super().__init__(
            f"The workspace given has a length of {found}, "
            f"however a length of at least {required} is necessary."
        )


class WeightOfZero(LinearError):
    """An element was given a weight of zero where points at infinity are not allowed."""

    def __init__(self, index):
        self.index = index
        super().__init__(
            f"The element at index {index} has a weight of zero, "
            "which is not allowed for this curve."
        )
