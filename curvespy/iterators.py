import operator

from .knots import Equidistant


class IntoIter:
    """Double-ended iterator over all elements of a chain.

    The iterator knows exactly how many elements are left (`len`) and keeps returning
    `StopIteration` once exhausted. Elements can be taken from the back with `next_back`
    or by iterating `reversed(iterator)`, both ends share the same remaining range.
    """

    def __init__(self, chain):
        self.chain = chain
        self.front = 0
        self.back = len(chain)

    def __iter__(self):
        return self

    def __next__(self):
        if self.front >= self.back:
            raise StopIteration
        value = self.chain.eval(self.front)
        self.front += 1
        return value

    def next_back(self):
        if self.front >= self.back:
            raise StopIteration
        self.back -= 1
        return self.chain.eval(self.back)

    def __len__(self):
        return self.back - self.front

    def __reversed__(self):
        while len(self) > 0:
            yield self.next_back()


class Extract:
    """Iterator which evaluates a signal at every input of another iterator"""

    def __init__(self, signal, iterable):
        self.signal = signal
        self.iterator = iter(iterable)

    def __iter__(self):
        return self

    def __next__(self):
        return self.signal.eval(next(self.iterator))

    def next_back(self):
        return self.signal.eval(self.iterator.next_back())

    def __len__(self):
        return len(self.iterator)

    def __length_hint__(self):
        return operator.length_hint(self.iterator)

    def __reversed__(self):
        for x in reversed(self.iterator):
            yield self.signal.eval(x)


class Stepper(IntoIter):
    """Iterator over `steps` equidistant values from `start` to `end`, both included

    Parameters
    ----------
    steps : int
        Number of values, at least 2.
    start, end : float
        First and last value.
    """

    def __init__(self, steps, start=0.0, end=1.0):
        if steps < 2:
            raise ValueError(f"A stepper needs at least 2 steps, got {steps}")
        super().__init__(Equidistant.with_domain(steps, start, end))

    @classmethod
    def normalized(cls, steps):
        """Stepper from 0.0 to 1.0"""
        return cls(steps)


class Take(Extract):
    """Samples of a curve at equidistant points of its domain"""

    def __init__(self, curve, samples):
        start, end = curve.domain()
        super().__init__(curve, Stepper(samples, start, end))
