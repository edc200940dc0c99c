import logging

from .builder import (
    EMPTY,
    EQUIDISTANT,
    WITH_EASING,
    WITH_ELEMENTS,
    WITH_KNOTS,
    Director,
    FluentBuilder,
)
from .easing import FuncEase, Identity
from .errors import Empty, KnotElementInequality, NotSorted, TooFewElements
from .knots import Equidistant, SortedChain, as_sorted
from .signal import Curve, Signal, as_chain
from .utils import merge
from .weights import Weighted, Weights

logger = logging.getLogger(__name__)


# ----------------------------------------------------------- #
# Linear interpolation
# ----------------------------------------------------------- #
class Linear(Curve):
    """Piecewise linear interpolation between elements placed at knots.

    The two elements surrounding the input are merged with the relative position
    of the input between their knots. An optional easing reshapes this factor
    before merging, such that each segment can be traversed non-linearly.
    Inputs outside of the knots extrapolate the first or last segment.

    Parameters
    ----------
    knots : SortedChain or array_like
        Sorted knots, one per element.
    elements : Chain or array_like
        Elements to interpolate, at least two. Arrays are split along their first axis.
    easing : Signal or callable, optional
        Function applied to the factor within each segment. Defaults to the identity.
    validate : bool
        Check the number of elements, the number of knots and the order of the knots.

    Raises
    ------
    TooFewElements
        If fewer than two elements are given.
    KnotElementInequality
        If the number of knots differs from the number of elements.
    NotSorted
        If plain knot values are not sorted.

    Examples
    --------
    >>> curve = Linear([0.0, 1.0, 2.0], [0.0, 5.0, 3.0])
    >>> curve(1.5)
    4.0
    """

    knots: SortedChain
    elements: Signal
    easing: Signal

    def __init__(self, knots, elements, easing=None, validate=True):
        self.knots = as_sorted(knots, validate)
        self.elements = as_chain(elements)
        self.easing = _as_easing(easing)
        if validate:
            if len(self.elements) < 2:
                raise TooFewElements(len(self.elements))
            if len(self.knots) != len(self.elements):
                raise KnotElementInequality(len(self.elements), len(self.knots))

    @classmethod
    def new(cls, knots, elements, easing=None):
        return cls(knots, elements, easing)

    @classmethod
    def new_unchecked(cls, knots, elements, easing=None):
        return cls(knots, elements, easing, validate=False)

    @staticmethod
    def builder():
        """Return a fluent builder for linear interpolations"""
        return LinearBuilder()

    def eval(self, x):
        lo, hi, factor = self.knots.upper_border_with_factor(x)
        factor = self.easing.eval(factor)
        return merge(self.elements.eval(lo), self.elements.eval(hi), factor)

    def domain(self):
        return self.knots.first(), self.knots.last()


def _as_easing(easing):
    if easing is None:
        return Identity()
    if isinstance(easing, Signal):
        return easing
    return FuncEase(easing)


# ----------------------------------------------------------- #
# Builders
# ----------------------------------------------------------- #
class LinearDirector(Director):
    """Staged construction of linear interpolations

    The stages are

    1. `elements` or `elements_with_weights`
    2. `knots`, or `equidistant` followed by `normalized`, `domain` or `distance`
    3. `easing` (optional)
    4. `build`
    """

    def elements(self, elements):
        self._require("elements", EMPTY)
        elements = as_chain(elements)
        _check_elements(elements)
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=False)

    def elements_with_weights(self, elements, allow_infinite=True):
        """Set elements given as `(element, weight)` pairs or homogeneous elements

        The built curve is the rational counterpart of the linear interpolation.
        With `allow_infinite=False`, an element of weight zero raises `WeightOfZero`.
        """
        self._require("elements_with_weights", EMPTY)
        elements = Weights(as_chain(elements), allow_infinite)
        _check_elements(elements)
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=True)

    def knots(self, knots):
        self._require("knots", WITH_ELEMENTS)
        knots = as_sorted(knots)
        elements = self.state["elements"]
        if len(knots) != len(elements):
            raise KnotElementInequality(len(elements), len(knots))
        return self._advance(WITH_KNOTS, knots=knots)

    def equidistant(self):
        """Use equidistant knots, set with `normalized`, `domain` or `distance` afterwards"""
        self._require("equidistant", WITH_ELEMENTS)
        return self._advance(EQUIDISTANT)

    def normalized(self):
        self._require("normalized", EQUIDISTANT)
        knots = Equidistant.normalized(len(self.state["elements"]))
        return self._advance(WITH_KNOTS, knots=knots)

    def domain(self, start, end):
        self._require("domain", EQUIDISTANT)
        if end < start:
            raise NotSorted(0)
        knots = Equidistant.with_domain(len(self.state["elements"]), start, end)
        return self._advance(WITH_KNOTS, knots=knots)

    def distance(self, start, step):
        self._require("distance", EQUIDISTANT)
        if step < 0:
            raise NotSorted(0)
        knots = Equidistant.with_step(len(self.state["elements"]), start, step)
        return self._advance(WITH_KNOTS, knots=knots)

    def easing(self, easing):
        self._require("easing", WITH_KNOTS)
        return self._advance(WITH_EASING, easing=_as_easing(easing))

    def build(self):
        self._require("build", WITH_KNOTS, WITH_EASING)
        curve = Linear(self.state["knots"], self.state["elements"], self.state.get("easing"))
        logger.debug(
            "Built linear interpolation of %d elements (weighted=%s)",
            len(curve.elements),
            self.state["weighted"],
        )
        if self.state["weighted"]:
            return Weighted(curve)
        return curve


def _check_elements(elements):
    if len(elements) == 0:
        raise Empty()
    if len(elements) < 2:
        raise TooFewElements(len(elements))


class LinearBuilder(FluentBuilder):
    """Fluent counterpart of `LinearDirector` which raises errors only from `build`

    Examples
    --------
    >>> curve = (
    ...     LinearBuilder()
    ...     .elements([1.0, 5.0, 100.0])
    ...     .equidistant()
    ...     .normalized()
    ...     .build()
    ... )
    >>> [float(value) for value in curve.take(5)]
    [1.0, 3.0, 5.0, 52.5, 100.0]
    """

    director_class = LinearDirector

    def elements(self, elements):
        return self._apply("elements", elements)

    def elements_with_weights(self, elements, allow_infinite=True):
        return self._apply("elements_with_weights", elements, allow_infinite)

    def knots(self, knots):
        return self._apply("knots", knots)

    def equidistant(self):
        return self._apply("equidistant")

    def normalized(self):
        return self._apply("normalized")

    def domain(self, start, end):
        return self._apply("domain", start, end)

    def distance(self, start, step):
        return self._apply("distance", start, step)

    def easing(self, easing):
        return self._apply("easing", easing)
