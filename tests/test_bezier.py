import jax.numpy as jnp
import numpy as np
import pytest

import curvespy as cp


def build_bezier(elements):
    return cp.Bezier.builder().elements(elements).normalized().dynamic().build()


# ----------------------------------------------------------- #
# Evaluation
# ----------------------------------------------------------- #
def test_bezier_values():
    curve = build_bezier([20.0, 100.0, 0.0, 200.0])
    expected = [20.0, 53.75, 65.0, 98.75, 200.0]
    np.testing.assert_allclose(list(curve.take(5)), expected, atol=1e-9)


def test_bezier_extrapolation():
    curve = build_bezier([20.0, 0.0, 200.0])
    assert curve.eval(2.0) == pytest.approx(820.0)
    assert curve.eval(-1.0) == pytest.approx(280.0)


def test_bezier_linear_and_constant():
    line = build_bezier([0.0, 4.0])
    assert line.eval(0.25) == pytest.approx(1.0)
    constant = build_bezier([7.0])
    assert constant.degree == 0
    assert constant.eval(0.3) == 7.0
    value, tangent = constant.eval_with_tangent(0.3)
    assert value == 7.0
    assert float(tangent) == 0.0


def test_bezier_tangent():
    value, tangent = build_bezier([5.0, 5.0]).eval_with_tangent(0.5)
    assert value == pytest.approx(5.0)
    assert tangent == pytest.approx(0.0)

    value, tangent = build_bezier([1.0, 2.0, 3.0]).eval_with_tangent(0.5)
    assert value == pytest.approx(2.0)
    assert tangent == pytest.approx(2.0)


def test_bezier_derivatives():
    curve = build_bezier([1.0, 2.0, 3.0])
    value, first, second = curve.eval_with_derivatives(0.5, 2)
    assert value == pytest.approx(2.0)
    assert first == pytest.approx(2.0)
    assert second == pytest.approx(0.0)


def test_bezier_derivatives_of_cubic():
    # B(x) = 3x^2 (1-x) * 1 + x^3 * 1 = 3x^2 - 2x^3
    curve = build_bezier([0.0, 0.0, 1.0, 1.0])
    x = 0.3
    derivatives = curve.eval_with_derivatives(x, 5)
    assert len(derivatives) == 6
    expected = [3 * x**2 - 2 * x**3, 6 * x - 6 * x**2, 6 - 12 * x, -12.0, 0.0, 0.0]
    np.testing.assert_allclose([float(d) for d in derivatives], expected, atol=1e-12)
    value, tangent = curve.eval_with_tangent(x)
    assert value == pytest.approx(expected[0])
    assert tangent == pytest.approx(expected[1])


def test_bezier_of_points():
    points = jnp.array([[0.0, 0.0], [1.0, 2.0], [2.0, 0.0]])
    curve = build_bezier(points)
    np.testing.assert_allclose(curve.eval(0.5), [1.0, 1.0])
    derivatives = curve.eval_with_derivatives(0.5, 3)
    np.testing.assert_allclose(derivatives[1], [2.0, 0.0])
    np.testing.assert_allclose(derivatives[2], [0.0, -8.0])
    np.testing.assert_allclose(derivatives[3], [0.0, 0.0])


def test_bezier_elevate():
    curve = build_bezier([20.0, 100.0, 0.0, 200.0])
    elevated = curve.elevate()
    assert elevated.degree == 4
    assert len(elevated.elements) == 5
    for x in [0.0, 0.2, 0.5, 0.9, 1.0]:
        assert elevated.eval(x) == pytest.approx(curve.eval(x))


def test_bezier_domain_and_smoothstep():
    curve = cp.Bezier.builder().elements([0.0, 0.0, 1.0, 1.0]).domain(2.0, 4.0).dynamic().build()
    assert curve.domain() == pytest.approx((2.0, 4.0))
    for x in [0.0, 0.25, 0.5, 1.0]:
        assert curve.eval(2.0 + 2.0 * x) == pytest.approx(cp.smoothstep(x))


def test_rational_bezier_quarter_circle():
    curve = (
        cp.Bezier.builder()
        .elements_with_weights(
            [
                (jnp.array([1.0, 0.0]), 1.0),
                (jnp.array([1.0, 1.0]), np.sqrt(2.0) / 2.0),
                (jnp.array([0.0, 1.0]), 1.0),
            ]
        )
        .normalized()
        .dynamic()
        .build()
    )
    for point in curve.take(9):
        assert float(jnp.linalg.norm(point)) == pytest.approx(1.0)


# ----------------------------------------------------------- #
# Construction
# ----------------------------------------------------------- #
def test_bezier_workspaces():
    elements = [1.0, 2.0, 3.0]
    constant = cp.Bezier.builder().elements(elements).normalized().constant(4).build()
    custom = cp.Bezier.builder().elements(elements).normalized().workspace(cp.DynSpace(3)).build()
    assert constant.eval(0.5) == pytest.approx(custom.eval(0.5))


def test_bezier_errors():
    with pytest.raises(cp.Empty):
        cp.Bezier([])
    with pytest.raises(cp.TooSmallWorkspace) as error:
        cp.Bezier([1.0, 2.0, 3.0], cp.ConstSpace(2))
    assert (error.value.found, error.value.required) == (2, 3)
    assert isinstance(error.value, cp.BezierError)
    with pytest.raises(cp.Empty):
        cp.Bezier.builder().elements([]).normalized().dynamic().build()
    with pytest.raises(cp.TooSmallWorkspace):
        cp.Bezier.builder().elements([1.0, 2.0]).normalized().constant(1).build()
    with pytest.raises(cp.BuilderStateError):
        cp.BezierDirector().elements([1.0]).dynamic()


def test_bezier_unchecked():
    curve = cp.Bezier.new_unchecked([1.0, 3.0])
    assert curve.eval(0.5) == pytest.approx(2.0)
    assert cp.Bezier.new([1.0, 3.0]).eval(0.5) == pytest.approx(2.0)
