import logging

import equinox as eqx

from .builder import (
    EMPTY,
    EQUIDISTANT,
    EQUIDISTANT_DEGREE,
    MODE,
    WITH_ELEMENTS,
    WITH_KNOTS,
    WITH_SPACE,
    Director,
    FluentBuilder,
)
from .errors import (
    Empty,
    IncongruousElementsDegree,
    IncongruousElementsKnots,
    InvalidDegree,
    NotSorted,
    TooFewElements,
    TooFewKnots,
    TooSmallWorkspace,
)
from .knots import BorderBuffer, BorderDeletion, Equidistant, SortedChain, as_sorted
from .signal import Chain, Curve, as_chain
from .space import ConstSpace, DynSpace, Space
from .utils import merge
from .weights import Weighted, Weights

logger = logging.getLogger(__name__)

OPEN = "open"
CLAMPED = "clamped"
LEGACY = "legacy"


# ----------------------------------------------------------- #
# B-spline curve
# ----------------------------------------------------------- #
class BSpline(Curve):
    """B-spline curve evaluated with the algorithm of de Boor.

    The knots are given in their normalized form, where the conventional first and
    last knot are left out. For `n` elements and `len(knots)` knots the degree of the
    curve is `p = len(knots) - n + 1` and the domain spans from knot `p-1` to knot
    `len(knots) - p`. The builder accepts clamped and conventional knot vectors as well
    and converts them into this form.

    Parameters
    ----------
    elements : Chain or array_like
        Control points, at least two.
    knots : SortedChain or array_like
        Sorted knots, between `n` and `2n - 2` of them.
    space : Space, optional
        Supplier of the workspace used while evaluating, with at least `p + 1` slots.
        Defaults to a `DynSpace` of exactly that size.
    validate : bool
        Check the order of the knots, the degree and the size of the workspace.

    Raises
    ------
    TooFewElements
        If fewer than two elements are given.
    InvalidDegree
        If the resulting degree is not within `1 <= p <= n - 1`.
    TooSmallWorkspace
        If the workspace has fewer than `p + 1` slots.
    NotSorted
        If plain knot values are not sorted.

    Notes
    -----
    Evaluation locates the knot span `idx` of the input, copies the `p + 1` elements
    `idx - p, ..., idx` into the workspace and merges them in `p` rounds.
    Inputs outside of the domain extrapolate the first or last polynomial piece.
    """

    elements: Chain
    knots: SortedChain
    space: Space
    degree: int = eqx.field(static=True)

    def __init__(self, elements, knots, space=None, validate=True):
        self.elements = as_chain(elements)
        self.knots = as_sorted(knots, validate)
        self.degree = len(self.knots) - len(self.elements) + 1
        self.space = DynSpace(max(self.degree + 1, 0)) if space is None else space
        if validate:
            length = len(self.elements)
            if length < 2:
                raise TooFewElements(length)
            if not 1 <= self.degree <= length - 1:
                raise InvalidDegree(self.degree)
            if len(self.space) < self.degree + 1:
                raise TooSmallWorkspace(len(self.space), self.degree + 1)

    @classmethod
    def new(cls, elements, knots, space=None):
        return cls(elements, knots, space)

    @classmethod
    def new_unchecked(cls, elements, knots, space=None):
        return cls(elements, knots, space, validate=False)

    @staticmethod
    def builder():
        """Return a fluent builder for B-spline curves"""
        return BSplineBuilder()

    def domain(self):
        return self.knots.eval(self.degree - 1), self.knots.eval(len(self.knots) - self.degree)

    def eval(self, x):
        p = self.degree
        index = self.knots.strict_upper_bound_clamped(x, p, len(self.knots) - p)
        workspace = self.space.workspace()
        for i in range(p + 1):
            workspace[i] = self.elements.eval(index - p + i)
        for r in range(1, p + 1):
            for j in range(p - r + 1):
                i = j + r + index - p
                factor = self.knots.factor(i - 1, i + p - r, x)
                workspace[j] = merge(workspace[j], workspace[j + 1], factor)
        return workspace[0]


# ----------------------------------------------------------- #
# Knot counts of the construction modes
# ----------------------------------------------------------- #
def degree_from_knots(mode, elements, knots):
    """Degree of a B-spline with `elements` elements given `knots` knots in the given mode

    Raises the construction error of the mode if the number of knots is not valid.
    """
    if mode == OPEN:
        if knots < 2:
            raise TooFewKnots(knots, 2)
        if not elements <= knots <= 2 * elements - 2:
            raise IncongruousElementsKnots(elements, knots)
        return knots - elements + 1
    if mode == CLAMPED:
        if knots < 2:
            raise TooFewKnots(knots, 2)
        if knots > elements:
            raise IncongruousElementsKnots(elements, knots)
        return elements - knots + 1
    if mode == LEGACY:
        if knots < 4:
            raise TooFewKnots(knots, 4)
        if not 2 <= knots - elements <= elements:
            raise IncongruousElementsKnots(elements, knots)
        return knots - elements - 1
    raise ValueError(f"Unknown B-spline mode {mode!r}")


def knots_from_degree(mode, elements, degree):
    """Number of knots a user gives for a B-spline of `degree` in the given mode"""
    if degree < 1:
        raise InvalidDegree(degree)
    if degree >= elements:
        raise IncongruousElementsDegree(elements, degree)
    if mode == OPEN:
        return elements + degree - 1
    if mode == CLAMPED:
        return elements - degree + 1
    if mode == LEGACY:
        return elements + degree + 1
    raise ValueError(f"Unknown B-spline mode {mode!r}")


def normalize_knots(mode, knots, degree):
    """Convert sorted knots given in the mode into their normalized form"""
    if mode == CLAMPED:
        return BorderBuffer(knots, degree - 1)
    if mode == LEGACY:
        return BorderDeletion(knots)
    return knots


def equidistant_knots(mode, elements, degree, start, step):
    """Normalized equidistant knots of a B-spline whose domain starts at `start`"""
    if mode == CLAMPED:
        inner = Equidistant.with_step(elements - degree + 1, start, step)
        return BorderBuffer(inner, degree - 1)
    return Equidistant.with_step(elements + degree - 1, start - (degree - 1) * step, step)


# ----------------------------------------------------------- #
# Builders
# ----------------------------------------------------------- #
class BSplineDirector(Director):
    """Staged construction of B-spline curves

    The stages are

    1. `open`, `clamped` or `legacy` (optional, open by default)
    2. `elements` or `elements_with_weights`
    3. `knots`, or `equidistant` followed by `degree` or `quantity` and then
       `normalized`, `domain` or `distance`
    4. `dynamic`, `constant` or `workspace`
    5. `build`

    In the open mode, knots are given in their normalized form. In the clamped mode
    only the knots of the domain are given and the first and last of them are repeated
    so the curve starts at the first element and ends at the last. In the legacy
    mode, the conventional knot vector of `n + p + 1` knots is given.
    """

    initial_stage = MODE

    def open(self):
        self._require("open", MODE)
        return self._advance(EMPTY, mode=OPEN)

    def clamped(self):
        self._require("clamped", MODE)
        return self._advance(EMPTY, mode=CLAMPED)

    def legacy(self):
        self._require("legacy", MODE)
        return self._advance(EMPTY, mode=LEGACY)

    @property
    def mode(self):
        return self.state.get("mode", OPEN)

    def elements(self, elements):
        self._require("elements", MODE, EMPTY)
        elements = as_chain(elements)
        _check_elements(elements)
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=False)

    def elements_with_weights(self, elements):
        """Set elements given as `(element, weight)` pairs or homogeneous elements"""
        self._require("elements_with_weights", MODE, EMPTY)
        elements = Weights(as_chain(elements))
        _check_elements(elements)
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=True)

    def knots(self, knots):
        self._require("knots", WITH_ELEMENTS)
        knots = as_sorted(knots)
        degree = degree_from_knots(self.mode, len(self.state["elements"]), len(knots))
        knots = normalize_knots(self.mode, knots, degree)
        return self._advance(WITH_KNOTS, knots=knots, degree=degree)

    def equidistant(self):
        """Use equidistant knots, given by `degree` or `quantity` afterwards"""
        self._require("equidistant", WITH_ELEMENTS)
        return self._advance(EQUIDISTANT)

    def degree(self, degree):
        self._require("degree", EQUIDISTANT)
        knots_from_degree(self.mode, len(self.state["elements"]), degree)
        return self._advance(EQUIDISTANT_DEGREE, degree=degree)

    def quantity(self, quantity):
        """Number of knots, counted the way the current mode expects them"""
        self._require("quantity", EQUIDISTANT)
        degree = degree_from_knots(self.mode, len(self.state["elements"]), quantity)
        return self._advance(EQUIDISTANT_DEGREE, degree=degree)

    def normalized(self):
        """Place the knots so that the domain of the curve is [0, 1]"""
        self._require("normalized", EQUIDISTANT_DEGREE)
        return self.domain(0.0, 1.0)

    def domain(self, start, end):
        """Place the knots so that the domain of the curve is [start, end]"""
        self._require("domain", EQUIDISTANT_DEGREE)
        if end < start:
            raise NotSorted(0)
        degree = self.state["degree"]
        steps = len(self.state["elements"]) - degree
        return self.distance(start, (end - start) / steps)

    def distance(self, start, step):
        """Place the knots `step` apart so that the domain of the curve starts at `start`"""
        self._require("distance", EQUIDISTANT_DEGREE)
        if step < 0:
            raise NotSorted(0)
        degree = self.state["degree"]
        knots = equidistant_knots(self.mode, len(self.state["elements"]), degree, start, step)
        return self._advance(WITH_KNOTS, knots=knots)

    def dynamic(self):
        """Use a workspace sized by the degree of the curve"""
        self._require("dynamic", WITH_KNOTS)
        return self._advance(WITH_SPACE, space=DynSpace(self.state["degree"] + 1))

    def constant(self, size):
        """Use a workspace of `size` slots"""
        self._require("constant", WITH_KNOTS)
        return self.workspace(ConstSpace(size))

    def workspace(self, space):
        self._require("workspace", WITH_KNOTS)
        required = self.state["degree"] + 1
        if len(space) < required:
            raise TooSmallWorkspace(len(space), required)
        return self._advance(WITH_SPACE, space=space)

    def build(self):
        self._require("build", WITH_SPACE)
        curve = BSpline(self.state["elements"], self.state["knots"], self.state["space"])
        logger.debug(
            "Built %s B-spline of degree %d with %d elements (weighted=%s)",
            self.mode,
            curve.degree,
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


class BSplineBuilder(FluentBuilder):
    """Fluent counterpart of `BSplineDirector` which raises errors only from `build`

    Examples
    --------
    >>> curve = (
    ...     BSplineBuilder()
    ...     .clamped()
    ...     .elements([0.0, 5.0, 3.0, 10.0, 7.0])
    ...     .equidistant()
    ...     .degree(3)
    ...     .normalized()
    ...     .dynamic()
    ...     .build()
    ... )
    >>> curve.domain()
    (0.0, 1.0)
    """

    director_class = BSplineDirector

    def open(self):
        return self._apply("open")

    def clamped(self):
        return self._apply("clamped")

    def legacy(self):
        return self._apply("legacy")

    def elements(self, elements):
        return self._apply("elements", elements)

    def elements_with_weights(self, elements):
        return self._apply("elements_with_weights", elements)

    def knots(self, knots):
        return self._apply("knots", knots)

    def equidistant(self):
        return self._apply("equidistant")

    def degree(self, degree):
        return self._apply("degree", degree)

    def quantity(self, quantity):
        return self._apply("quantity", quantity)

    def normalized(self):
        return self._apply("normalized")

    def domain(self, start, end):
        return self._apply("domain", start, end)

    def distance(self, start, step):
        return self._apply("distance", start, step)

    def dynamic(self):
        return self._apply("dynamic")

    def constant(self, size):
        return self._apply("constant", size)

    def workspace(self, space):
        return self._apply("workspace", space)
