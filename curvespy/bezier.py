import logging

from .adaptors import TransformInput
from .builder import EMPTY, WITH_ELEMENTS, WITH_KNOTS, WITH_SPACE, Director, FluentBuilder
from .errors import Empty, TooSmallWorkspace
from .signal import Chain, Curve, Elements, as_chain
from .space import ConstSpace, DynSpace, Space
from .utils import falling_factorial, merge, triangle_folding_inline, zero_like
from .weights import Weighted, Weights

logger = logging.getLogger(__name__)


# ----------------------------------------------------------- #
# Bezier curve
# ----------------------------------------------------------- #
class Bezier(Curve):
    """Bezier curve evaluated with the algorithm of de Casteljau.

    The elements are the control points of the curve, the degree of the curve is one
    less than the number of elements. The domain of the curve is [0, 1], where the
    first and the last element are interpolated. Inputs outside of the domain
    extrapolate the polynomial.

    Parameters
    ----------
    elements : Chain or array_like
        Control points, at least one.
    space : Space, optional
        Supplier of the workspace used while evaluating. It needs at least as many slots
        as there are elements. Defaults to a `DynSpace` of exactly that size.
    validate : bool
        Check the number of elements and the size of the workspace.

    Raises
    ------
    Empty
        If no elements are given.
    TooSmallWorkspace
        If the workspace has fewer slots than there are elements.

    Notes
    -----
    Each evaluation copies the elements into a fresh workspace and folds it in place
    with `merge`. This takes `n(n-1)/2` merges for `n` elements.
    """

    elements: Chain
    space: Space

    def __init__(self, elements, space=None, validate=True):
        self.elements = as_chain(elements)
        self.space = DynSpace(len(self.elements)) if space is None else space
        if validate:
            if len(self.elements) == 0:
                raise Empty()
            if len(self.space) < len(self.elements):
                raise TooSmallWorkspace(len(self.space), len(self.elements))

    @classmethod
    def new(cls, elements, space=None):
        return cls(elements, space)

    @classmethod
    def new_unchecked(cls, elements, space=None):
        return cls(elements, space, validate=False)

    @staticmethod
    def builder():
        """Return a fluent builder for Bezier curves"""
        return BezierBuilder()

    @property
    def degree(self):
        return len(self.elements) - 1

    def domain(self):
        return 0.0, 1.0

    def _workspace(self):
        workspace = self.space.workspace()
        for i in range(len(self.elements)):
            workspace[i] = self.elements.eval(i)
        return workspace

    def eval(self, x):
        workspace = self._workspace()
        length = len(self.elements)
        triangle_folding_inline(workspace, lambda a, b: merge(a, b, x), length - 1, length)
        return workspace[0]

    def eval_with_tangent(self, x):
        """Evaluate the curve and its first derivative

        Returns
        -------
        tuple
            The value and the derivative at `x`. The derivative of a curve with
            a single element is the zero element.
        """
        workspace = self._workspace()
        length = len(self.elements)
        if length == 1:
            return workspace[0], zero_like(workspace[0])
        triangle_folding_inline(workspace, lambda a, b: merge(a, b, x), length - 2, length)
        tangent = (workspace[1] - workspace[0]) * (length - 1)
        return merge(workspace[0], workspace[1], x), tangent

    def eval_with_derivatives(self, x, order):
        """Evaluate the curve and all of its derivatives up to `order`

        Parameters
        ----------
        x : float
            Input of the curve.
        order : int
            Highest derivative to compute.

        Returns
        -------
        list
            `order + 1` elements, where entry `k` is the `k`-th derivative at `x`
            and entry 0 the value itself. Derivatives of higher order than the
            degree of the curve are zero elements.
        """
        workspace = self._workspace()
        degree = len(self.elements) - 1
        highest = min(order, degree)

        # Reduce the control points to the ones needed by the highest derivative
        triangle_folding_inline(
            workspace, lambda a, b: merge(a, b, x), degree - highest, degree + 1
        )

        # Alternate forward differences and single de Casteljau rounds
        results = [None] * (order + 1)
        for k in range(highest, 0, -1):
            differences = workspace[: k + 1]
            triangle_folding_inline(differences, lambda a, b: b - a, k)
            results[k] = differences[0] * falling_factorial(degree, k)
            triangle_folding_inline(workspace, lambda a, b: merge(a, b, x), 1, k + 1)
        results[0] = workspace[0]

        for k in range(highest + 1, order + 1):
            results[k] = zero_like(workspace[0])
        return results

    def elevate(self):
        """Return the same curve represented with one more control point

        The new control points are `Q_0 = P_0`, `Q_n = P_(n-1)` and
        `Q_i = (i/n) P_(i-1) + (1 - i/n) P_i` in between.
        """
        length = len(self.elements)
        points = [self.elements.eval(0)]
        for i in range(1, length):
            points.append(merge(self.elements.eval(i), self.elements.eval(i - 1), i / length))
        points.append(self.elements.eval(length - 1))
        logger.debug("Elevated Bezier curve from degree %d to %d", length - 1, length)
        return Bezier(Elements(points), DynSpace(length + 1))


# ----------------------------------------------------------- #
# Builders
# ----------------------------------------------------------- #
class BezierDirector(Director):
    """Staged construction of Bezier curves

    The stages are

    1. `elements` or `elements_with_weights`
    2. `normalized` or `domain`
    3. `dynamic`, `constant` or `workspace`
    4. `build`
    """

    def elements(self, elements):
        self._require("elements", EMPTY)
        elements = as_chain(elements)
        if len(elements) == 0:
            raise Empty()
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=False)

    def elements_with_weights(self, elements):
        """Set elements given as `(element, weight)` pairs or homogeneous elements"""
        self._require("elements_with_weights", EMPTY)
        elements = Weights(as_chain(elements))
        if len(elements) == 0:
            raise Empty()
        return self._advance(WITH_ELEMENTS, elements=elements, weighted=True)

    def normalized(self):
        """Keep the domain [0, 1]"""
        self._require("normalized", WITH_ELEMENTS)
        return self._advance(WITH_KNOTS, domain=None)

    def domain(self, start, end):
        """Stretch the domain of the curve to [start, end]"""
        self._require("domain", WITH_ELEMENTS)
        return self._advance(WITH_KNOTS, domain=(start, end))

    def dynamic(self):
        """Use a workspace sized by the number of elements"""
        self._require("dynamic", WITH_KNOTS)
        return self._advance(WITH_SPACE, space=DynSpace(len(self.state["elements"])))

    def constant(self, size):
        """Use a workspace of `size` slots"""
        self._require("constant", WITH_KNOTS)
        return self.workspace(ConstSpace(size))

    def workspace(self, space):
        self._require("workspace", WITH_KNOTS)
        required = len(self.state["elements"])
        if len(space) < required:
            raise TooSmallWorkspace(len(space), required)
        return self._advance(WITH_SPACE, space=space)

    def build(self):
        self._require("build", WITH_SPACE)
        curve = Bezier(self.state["elements"], self.state["space"])
        logger.debug(
            "Built Bezier curve of degree %d (weighted=%s, domain=%s)",
            curve.degree,
            self.state["weighted"],
            self.state["domain"],
        )
        if self.state["weighted"]:
            curve = Weighted(curve)
        if self.state["domain"] is not None:
            curve = TransformInput.normalized_to_domain(curve, *self.state["domain"])
        return curve


class BezierBuilder(FluentBuilder):
    """Fluent counterpart of `BezierDirector` which raises errors only from `build`"""

    director_class = BezierDirector

    def elements(self, elements):
        return self._apply("elements", elements)

    def elements_with_weights(self, elements):
        return self._apply("elements_with_weights", elements)

    def normalized(self):
        return self._apply("normalized")

    def domain(self, start, end):
        return self._apply("domain", start, end)

    def dynamic(self):
        return self._apply("dynamic")

    def constant(self, size):
        return self._apply("constant", size)

    def workspace(self, space):
        return self._apply("workspace", space)
