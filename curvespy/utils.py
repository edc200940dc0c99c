import math

import jax
import jax.numpy as jnp


# ----------------------------------------------------------- #
# Element arithmetic
# ----------------------------------------------------------- #
def lerp(first, second, factor):
    """Linear interpolation `first*(1-factor) + second*factor`."""
    return first * (1.0 - factor) + second * factor


def merge(first, second, factor):
    """Merge two elements with the given factor.

    Elements which define their own `merge(other, factor)` method are merged with it,
    every other element is interpolated linearly with `lerp`.

    Parameters
    ----------
    first, second : element
        Elements to merge. A factor of 0 returns `first`, a factor of 1 returns `second`.
    factor : float
        Merge factor. Values outside of [0, 1] extrapolate.

    Returns
    -------
    element
        The merged element.
    """
    custom = getattr(first, "merge", None)
    if custom is not None:
        return custom(second, factor)
    return lerp(first, second, factor)


def zero_like(element):
    """Return the zero element of the same structure as `element`.

    Works for scalars, arrays and any jax pytree of arrays (such as `Homogeneous`).
    """
    return jax.tree_util.tree_map(jnp.zeros_like, element)


# ----------------------------------------------------------- #
# In-place folding of workspaces
# ----------------------------------------------------------- #
def triangle_folding_inline(elements, func, steps, length=None):
    """Fold a triangle of values into the first positions of `elements`.

    After `k` steps, position `i` holds `func` applied to the positions `i..i+k`
    of the original values. Using `steps = length - 1` folds everything into `elements[0]`.
    """
    length = len(elements) if length is None else length
    for k in range(1, steps + 1):
        for i in range(length - k):
            elements[i] = func(elements[i], elements[i + 1])


def falling_factorial(n, k):
    """Product `n*(n-1)*...*(n-k+1)`, equal to one for `k=0`."""
    return math.prod(range(n - k + 1, n + 1))
