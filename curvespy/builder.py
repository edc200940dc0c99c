"""Shared machinery of the staged curve builders.

A director is an immutable description of a curve under construction. Every call
returns a new director tagged with the next stage and raises as soon as an input
is invalid. Calling a method which is not available in the current stage raises
`BuilderStateError`.

A fluent builder wraps a director. It keeps the first construction error, skips
all calls after it and raises it from `build`, such that a chain of calls has to
be checked only once.
"""

import logging

from .errors import BuilderStateError, CurveError

logger = logging.getLogger(__name__)


# ----------------------------------------------------------- #
# Stage tags
# ----------------------------------------------------------- #
MODE = "mode"
EMPTY = "empty"
WITH_ELEMENTS = "elements"
EQUIDISTANT = "equidistant"
EQUIDISTANT_DEGREE = "equidistant degree"
WITH_KNOTS = "knots"
WITH_EASING = "easing"
WITH_SPACE = "space"


# ----------------------------------------------------------- #
# Directors
# ----------------------------------------------------------- #
class Director:
    """Base class of the staged directors

    Parameters
    ----------
    stage : str
        Stage tag of the director.
    **state
        Everything collected by the previous stages.
    """

    initial_stage = EMPTY

    def __init__(self, stage=None, **state):
        self.stage = self.initial_stage if stage is None else stage
        self.state = state

    def __repr__(self):
        return f"{type(self).__name__}(stage={self.stage!r})"

    def _require(self, method, *stages):
        if self.stage not in stages:
            expected = ", ".join(repr(stage) for stage in stages)
            raise BuilderStateError(
                f"{type(self).__name__}.{method}() is not available in the stage "
                f"{self.stage!r}. It can only be called in the stages: {expected}."
            )

    def _advance(self, stage, **changes):
        state = dict(self.state)
        state.update(changes)
        return type(self)(stage, **state)


# ----------------------------------------------------------- #
# Fluent builders
# ----------------------------------------------------------- #
class FluentBuilder:
    """Base class of the fluent builders

    Subclasses set `director_class` and forward their methods with `_apply`.
    """

    director_class = Director

    def __init__(self, director=None):
        self.director = self.director_class() if director is None else director
        self.error = None

    def __repr__(self):
        return f"{type(self).__name__}(director={self.director!r}, error={self.error!r})"

    def _apply(self, method, *args, **kwargs):
        if self.error is None:
            try:
                self.director = getattr(self.director, method)(*args, **kwargs)
            except CurveError as error:
                logger.debug("%s.%s() failed: %s", type(self).__name__, method, error)
                self.error = error
        return self

    def build(self):
        """Build the curve or raise the first error encountered while describing it"""
        if self.error is not None:
            raise self.error
        return self.director.build()
