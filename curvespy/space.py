import abc

import equinox as eqx


class Space(eqx.Module):
    """Supplier of scratch lists used while evaluating a curve.

    Every call to `workspace` returns a new list, so no state is shared between
    two evaluations of the same curve.
    """

    @abc.abstractmethod
    def __len__(self):
        """Number of slots of each workspace"""

    @abc.abstractmethod
    def workspace(self):
        """Return a fresh list with `len(self)` slots"""


class ConstSpace(Space):
    """Workspace of a size chosen by the caller"""

    size: int = eqx.field(static=True)
    fill: object = eqx.field(static=True)

    def __init__(self, size, fill=0.0):
        self.size = size
        self.fill = fill

    def __len__(self):
        return self.size

    def workspace(self):
        return [self.fill] * self.size


class DynSpace(Space):
    """Workspace sized from the data the curve is built from"""

    size: int = eqx.field(static=True)
    fill: object = eqx.field(static=True)

    def __init__(self, size, fill=0.0):
        self.size = size
        self.fill = fill

    def __len__(self):
        return self.size

    def workspace(self):
        return [self.fill] * self.size
