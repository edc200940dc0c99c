import jax
import jax.lax as lax
import jax.numpy as jnp

from .utils import falling_factorial


# -------------------------------------------------------------------------------------------------------------------- #
# Linear interpolation of arrays
# -------------------------------------------------------------------------------------------------------------------- #
def compute_linear_values(E, K, u):
    """
    Evaluate a piecewise linear interpolation of array elements.

    The knot segment of every parameter value is located with a sorted search and the
    two surrounding elements are interpolated linearly. Parameter values outside of the
    knots extrapolate the first or last segment.

    Parameters
    ----------
    E : ndarray (n, ...)
        Elements to interpolate. The first dimension spans the elements `(0, 1, ..., n-1)`.
    K : ndarray (n,)
        Sorted knots, one per element.
    u : scalar or ndarray (N,)
        Parameter value(s) at which to evaluate the interpolation.

    Returns
    -------
    C : ndarray (N, ...)
        Interpolated values, the first dimension spans the parameter values `u`.
    """
    E = jnp.asarray(E)
    K = jnp.asarray(K)
    u = jnp.atleast_1d(u)
    return jax.vmap(lambda uu: _linear_single_u(E, K, uu))(u)

# Apply JIT compilation
compute_linear_values = jax.jit(compute_linear_values)

def _linear_single_u(E, K, u):
    """Interpolate the elements at a single scalar u."""

    # Indices of the knots surrounding u, kept within the first and last segment
    index = jnp.searchsorted(K, u, side="right")
    lo = jnp.clip(index - 1, 0, K.shape[0] - 2)

    # Relative position within the segment, zero for coinciding knots
    t = _safe_factor(u, K[lo], K[lo + 1])
    return E[lo] * (1.0 - t) + E[lo + 1] * t


def _safe_factor(u, start, end):
    width = end - start
    safe_width = jnp.where(width == 0.0, 1.0, width)
    return jnp.where(width == 0.0, 0.0, (u - start) / safe_width)


# -------------------------------------------------------------------------------------------------------------------- #
# Bezier curves of arrays
# -------------------------------------------------------------------------------------------------------------------- #
def compute_bezier_values(E, u):
    """
    Evaluate a Bezier curve with the algorithm of de Casteljau.

    Parameters
    ----------
    E : ndarray (n, ...)
        Control points, the first dimension spans the control points along the curve.
    u : scalar or ndarray (N,)
        Parameter value(s) at which to evaluate the curve.

    Returns
    -------
    C : ndarray (N, ...)
        Points of the curve, the first dimension spans the parameter values `u`.
    """
    E = jnp.asarray(E)
    u = jnp.atleast_1d(u)
    return jax.vmap(lambda uu: _de_casteljau(E, uu))(u)

# Apply JIT compilation
compute_bezier_values = jax.jit(compute_bezier_values)

def _de_casteljau(E, u):
    """Fold all control points into the point of the curve at a single scalar u."""
    W = E
    for _ in range(E.shape[0] - 1):
        W = W[:-1] * (1.0 - u) + W[1:] * u
    return W[0]


def compute_bezier_derivatives(E, u, up_to_order):
    """
    Compute the derivatives of a Bezier curve up to a specified order.

    The k-th derivative of a Bezier curve of degree `d` is the Bezier curve of degree `d-k`
    whose control points are the k-th forward differences of the original control points,
    scaled by `d!/(d-k)!`.

    Parameters
    ----------
    E : ndarray (n, ...)
        Control points, the first dimension spans the control points along the curve.
    u : scalar or ndarray (N,)
        Parameter value(s) at which to evaluate the derivatives.
    up_to_order : int
        Highest derivative order to compute.

    Returns
    -------
    derivatives : ndarray (up_to_order+1, N, ...)
        `derivatives[k]` holds the k-th derivative at each `u`, `derivatives[0]` the curve itself.
        Derivatives above the degree of the curve are zero.
    """
    E = jnp.asarray(E)
    u = jnp.atleast_1d(u)
    degree = E.shape[0] - 1

    derivatives = []
    for k in range(up_to_order + 1):
        if k > degree:
            derivatives.append(jnp.zeros((u.shape[0],) + E.shape[1:], dtype=E.dtype))
            continue
        D = E if k == 0 else jnp.diff(E, n=k, axis=0) * falling_factorial(degree, k)
        derivatives.append(jax.vmap(lambda uu: _de_casteljau(D, uu))(u))

    return jnp.stack(derivatives, axis=0)

# Apply JIT compilation
compute_bezier_derivatives = jax.jit(
    compute_bezier_derivatives,
    static_argnames=("up_to_order",),
)


# -------------------------------------------------------------------------------------------------------------------- #
# B-spline curves of arrays
# -------------------------------------------------------------------------------------------------------------------- #
def compute_bspline_values(E, K, p, u):
    """
    Evaluate a B-spline curve with the algorithm of de Boor.

    The knots are given in their normalized form without the conventional first and
    last knot, such that `len(K) = n + p - 1` and the domain spans from `K[p-1]` to `K[len(K)-p]`.

    Parameters
    ----------
    E : ndarray (n, ...)
        Control points, the first dimension spans the control points along the curve.
    K : ndarray (n+p-1,)
        Sorted normalized knots.
    p : int
        Degree of the curve.
    u : scalar or ndarray (N,)
        Parameter value(s) at which to evaluate the curve.

    Returns
    -------
    C : ndarray (N, ...)
        Points of the curve, the first dimension spans the parameter values `u`.
    """
    E = jnp.asarray(E)
    K = jnp.asarray(K)
    u = jnp.atleast_1d(u)
    return jax.vmap(lambda uu: _de_boor(E, K, p, uu))(u)

# Apply JIT compilation
compute_bspline_values = jax.jit(
    compute_bspline_values,
    static_argnames=("p",),
)

def _de_boor(E, K, p, u):
    """Evaluate the B-spline at a single scalar u."""

    # Knot span of u, restricted to the spans of the domain
    m = K.shape[0]
    index = jnp.searchsorted(K[p:m - p], u, side="right") + p

    # Copy the p+1 control points of the span into the workspace
    window = lax.dynamic_slice_in_dim(E, index - p, p + 1, axis=0)
    W = [window[i] for i in range(p + 1)]

    # Merge the workspace in p rounds
    for r in range(1, p + 1):
        for j in range(p - r + 1):
            i = j + r + index - p
            t = _safe_factor(u, K[i - 1], K[i + p - r])
            W[j] = W[j] * (1.0 - t) + W[j + 1] * t

    return W[0]


def compute_rational_bspline_values(E, W, K, p, u):
    """
    Evaluate a rational B-spline (NURBS) curve.

    The control points are lifted to homogeneous space `(x*w, y*w, ..., w)`, evaluated with
    `compute_bspline_values` and projected back by the rational perspective division.

    Parameters
    ----------
    E : ndarray (n, ...)
        Control points, the first dimension spans the control points along the curve.
    W : ndarray (n,)
        Weights associated with each control point.
    K : ndarray (n+p-1,)
        Sorted normalized knots.
    p : int
        Degree of the curve.
    u : scalar or ndarray (N,)
        Parameter value(s) at which to evaluate the curve.

    Returns
    -------
    C : ndarray (N, ...)
        Points of the curve, the first dimension spans the parameter values `u`.
    """
    E = jnp.asarray(E)
    W = jnp.asarray(W)
    n = E.shape[0]

    # Map control points to homogeneous space
    P = jnp.reshape(E, (n, -1))
    P_w = jnp.concatenate((P * W[:, None], W[:, None]), axis=1)

    # Evaluate in homogeneous space and project back
    C_w = compute_bspline_values(P_w, K, p, u)
    C = C_w[:, :-1] / C_w[:, -1:]
    return jnp.reshape(C, (C.shape[0],) + E.shape[1:])

# Apply JIT compilation
compute_rational_bspline_values = jax.jit(
    compute_rational_bspline_values,
    static_argnames=("p",),
)
