import abc

import equinox as eqx


# ----------------------------------------------------------- #
# Abstract producers
# ----------------------------------------------------------- #
class Signal(eqx.Module):
    """Pure function from an input to an element.

    Subclasses implement `eval`. Calling the signal is the same as calling `eval`.
    Every adaptor of the curve algebra (stack, composite, slice, clamp, repeat, ...)
    is reachable as a method from here or from the `Chain` and `Curve` refinements.

    Notes
    -----
    Signals are immutable `equinox.Module` objects. Evaluation is plain Python and
    may be shared freely between threads.
    """

    @abc.abstractmethod
    def eval(self, x):
        """Evaluate the signal at the input `x`"""

    def __call__(self, x):
        return self.eval(x)

    def extract(self, iterable):
        """Lazily evaluate the signal at every input yielded by `iterable`"""
        from .iterators import Extract

        return Extract(self, iterable)

    def sample(self, iterable):
        """Lazily evaluate the signal at every input of `iterable` without giving up the signal.

        Python shares the signal by reference, so this is the same iterator as `extract`.
        """
        from .iterators import Extract

        return Extract(self.by_ref(), iterable)

    def by_ref(self):
        """Return the signal itself, useful to attach adaptors without rebinding the original"""
        return self

    def stack(self, other):
        """Evaluate this signal and `other` with the same input and return both as a tuple"""
        from .adaptors import Stack

        return Stack(self, other)

    def composite(self, other):
        """Feed the output of this signal into `other`"""
        from .adaptors import Composite

        return Composite(self, other)


class Chain(Signal):
    """Signal over the indices `0..len(chain)`"""

    @abc.abstractmethod
    def __len__(self):
        """Number of valid indices"""

    def is_empty(self):
        return len(self) == 0

    def first(self):
        """First element or None if the chain is empty"""
        if self.is_empty():
            return None
        return self.eval(0)

    def last(self):
        """Last element or None if the chain is empty"""
        if self.is_empty():
            return None
        return self.eval(len(self) - 1)

    def __iter__(self):
        from .iterators import IntoIter

        return IntoIter(self)

    def __reversed__(self):
        from .iterators import IntoIter

        return reversed(IntoIter(self))

    def repeat(self):
        """Endless chain which starts over after the last element"""
        from .adaptors import Repeat

        return Repeat(self)

    def wrap(self, n):
        """Chain with `n` additional elements, taken from the start again"""
        from .adaptors import Wrap

        return Wrap(self, n)


class ConstChain(Chain):
    """Chain whose length is fixed once it is constructed"""

    def to_array(self):
        """Return all elements of the chain as a tuple"""
        return tuple(self.eval(i) for i in range(len(self)))


class Curve(Signal):
    """Signal over a real parameter with a declared domain.

    The domain is the interval in which the curve interpolates. Most curves also
    extrapolate outside of it, but not all of them do so in a meaningful way.
    """

    @abc.abstractmethod
    def domain(self):
        """Return the tuple `(start, end)` of the domain"""

    def take(self, samples):
        """Evaluate the curve at `samples` equidistant points of its domain, both ends included

        Parameters
        ----------
        samples : int
            Number of samples, at least 2.

        Returns
        -------
        Take
            Double-ended iterator of exactly `samples` elements.
        """
        from .iterators import Take

        return Take(self, samples)

    def slice(self, start=None, end=None):
        """Remap the domain of the curve onto the sub-interval `[start, end]`

        A bound given as None defaults to the corresponding end of the domain.
        """
        from .adaptors import Slice

        return Slice(self, start, end)

    def clamp(self):
        """Saturate all inputs to the domain of the curve"""
        from .adaptors import Clamp

        return Clamp(self)


# ----------------------------------------------------------- #
# Concrete leaves
# ----------------------------------------------------------- #
class Func(Signal):
    """Signal defined by a plain callable"""

    function: object = eqx.field(static=True)

    def __init__(self, function):
        self.function = function

    def eval(self, x):
        return self.function(x)


class Elements(ConstChain):
    """Chain backed by a tuple of elements.

    Any sequence or array is accepted. Arrays are split along their first axis,
    so the rows of a `(n, ndim)` array become `n` point elements.
    """

    values: tuple

    def __init__(self, values):
        self.values = tuple(values)

    def eval(self, x):
        return self.values[x]

    def __len__(self):
        return len(self.values)


def as_signal(obj):
    """Convert `obj` into a signal: signals are kept, callables are wrapped, sequences become chains"""
    if isinstance(obj, Signal):
        return obj
    if callable(obj):
        return Func(obj)
    return Elements(obj)


def as_chain(obj):
    """Convert a sequence or array into a chain, chains are returned unchanged"""
    if isinstance(obj, Chain):
        return obj
    return Elements(obj)
