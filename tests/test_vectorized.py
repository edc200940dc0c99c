import math

import jax.numpy as jnp
import numpy as np
import pytest

import curvespy as cp


# ----------------------------------------------------------- #
# Array kernels against the generic kernels
# ----------------------------------------------------------- #
def test_linear_values():
    E = jnp.array([20.0, 100.0, 0.0, 200.0])
    K = jnp.array([1.0, 2.0, 3.0, 4.0])
    u = jnp.array([-1.0, 1.0, 1.5, 2.0, 2.5, 4.0, 5.0])
    values = cp.compute_linear_values(E, K, u)
    curve = cp.Linear(K, E)
    expected = [float(curve.eval(float(x))) for x in u]
    np.testing.assert_allclose(values, expected, atol=1e-12)
    np.testing.assert_allclose(values[:3], [-140.0, 20.0, 60.0])


def test_linear_values_of_points_and_scalar_input():
    E = jnp.array([[0.0, 0.0], [1.0, 2.0], [3.0, 2.0]])
    K = jnp.array([0.0, 1.0, 2.0])
    values = cp.compute_linear_values(E, K, 1.5)
    assert values.shape == (1, 2)
    np.testing.assert_allclose(values[0], [2.0, 2.0])


def test_bezier_values():
    E = jnp.array([20.0, 100.0, 0.0, 200.0])
    u = jnp.linspace(0.0, 1.0, 5)
    np.testing.assert_allclose(cp.compute_bezier_values(E, u), [20.0, 53.75, 65.0, 98.75, 200.0])


def test_bezier_derivatives():
    E = jnp.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0], [4.0, 1.0]])
    u = jnp.linspace(-0.5, 1.5, 9)
    derivatives = cp.compute_bezier_derivatives(E, u, up_to_order=4)
    assert derivatives.shape == (5, 9, 2)
    curve = cp.Bezier(E)
    for j, x in enumerate(u):
        expected = curve.eval_with_derivatives(float(x), 4)
        for k in range(5):
            np.testing.assert_allclose(derivatives[k, j], expected[k], atol=1e-10)


def test_bspline_values():
    E = jnp.array([0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0])
    K = jnp.array([0.0, 0.0, 0.0, 0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 5.0, 5.0, 5.0])
    u = jnp.array([0.0, 0.4, 1.0, 2.5, 4.1, 5.0, 6.0])
    values = cp.compute_bspline_values(E, K, 4, u)
    curve = cp.BSpline(E, K)
    expected = [float(curve.eval(float(x))) for x in u]
    np.testing.assert_allclose(values, expected, atol=1e-12)
    np.testing.assert_allclose(values[3], 0.5989583333333334, atol=1e-12)


def test_bspline_values_of_points():
    E = jnp.array([[0.0, 0.0], [1.0, 3.0], [2.0, -1.0], [4.0, 0.5], [5.0, 2.0]])
    K = jnp.array([0.0, 0.0, 0.3, 0.7, 1.0, 1.0])
    curve = cp.BSpline(E, K)
    u = jnp.linspace(0.0, 1.0, 11)
    values = cp.compute_bspline_values(E, K, curve.degree, u)
    for j, x in enumerate(u):
        np.testing.assert_allclose(values[j], curve.eval(float(x)), atol=1e-12)


def test_rational_bspline_unit_circle():
    E = jnp.array([[1, 0], [1, 1], [0, 1], [-1, 1], [-1, 0], [-1, -1], [0, -1], [1, -1], [1, 0]], dtype=float)
    W = jnp.array([1.0, math.sqrt(2) / 2] * 4 + [1.0])
    K = jnp.array([0.0, 0.0, 1.0, 1.0, 2.0, 2.0, 3.0, 3.0, 4.0, 4.0])
    u = jnp.linspace(0.0, 4.0, 32)
    values = cp.compute_rational_bspline_values(E, W, K, 2, u)
    assert values.shape == (32, 2)
    np.testing.assert_allclose(jnp.linalg.norm(values, axis=1), 1.0, atol=1e-12)


def test_rational_bspline_of_scalars():
    E = jnp.array([1.0, 2.0, 3.0])
    W = jnp.array([1.0, 4.0, 1.0])
    K = jnp.array([0.0, 0.5, 1.0])
    values = cp.compute_rational_bspline_values(E, W, K, 1, jnp.array([0.25, 0.5]))
    assert values.shape == (2,)
    np.testing.assert_allclose(values, [1.8, 2.0])


@pytest.mark.parametrize("n", [2, 3, 6])
def test_bezier_values_match_generic_kernel(n):
    E = jnp.arange(n, dtype=float) ** 2
    u = jnp.linspace(0.0, 1.0, 7)
    curve = cp.Bezier(E)
    expected = [float(curve.eval(float(x))) for x in u]
    np.testing.assert_allclose(cp.compute_bezier_values(E, u), expected, atol=1e-12)
