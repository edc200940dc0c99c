import math

import jax.numpy as jnp
import numpy as np
import pytest

import curvespy as cp


# ----------------------------------------------------------- #
# Homogeneous elements
# ----------------------------------------------------------- #
def test_homogeneous_constructors():
    point = cp.Homogeneous.weighted(2.0, 4.0)
    assert point.element == 8.0
    assert point.rational == 4.0
    assert point.weight == 4.0
    assert float(point.project()) == pytest.approx(2.0)
    assert cp.Homogeneous.weighted(2.0, 0.0) is None

    infinite = cp.Homogeneous.weighted_or_infinite(3.0, 0.0)
    assert infinite.is_infinite()
    assert infinite.direction() == 3.0

    one = cp.Homogeneous.weighted_or_one(3.0, 0.0)
    assert not one.is_infinite()
    assert one.direction() is None
    assert float(one.project()) == 3.0


def test_homogeneous_projection_of_infinity():
    point = cp.Homogeneous.infinity(1.0)
    assert math.isinf(float(point.project()))


def test_homogeneous_arithmetic():
    a = cp.Homogeneous(2.0, 1.0)
    b = cp.Homogeneous(4.0, 3.0)
    total = a + b
    assert (total.element, total.rational) == (6.0, 4.0)
    difference = b - a
    assert (difference.element, difference.rational) == (2.0, 2.0)
    scaled = 2.0 * a
    assert (scaled.element, scaled.rational) == (4.0, 2.0)
    product = a * b
    assert (product.element, product.rational) == (8.0, 3.0)
    halved = b / 2.0
    assert (halved.element, halved.rational) == (2.0, 1.5)


def test_homogeneous_merge():
    a = cp.Homogeneous.weighted(1.0, 1.0)
    b = cp.Homogeneous.weighted(2.0, 4.0)
    merged = cp.merge(a, b, 0.5)
    assert merged.element == pytest.approx(4.5)
    assert merged.rational == pytest.approx(2.5)
    assert float(merged.project()) == pytest.approx(1.8)


def test_homogeneous_points():
    point = cp.Homogeneous.weighted(jnp.array([1.0, 2.0]), 0.5)
    np.testing.assert_allclose(point.element, [0.5, 1.0])
    np.testing.assert_allclose(point.project(), [1.0, 2.0])


def test_into_weight():
    homogeneous = cp.Homogeneous(1.0, 2.0)
    assert cp.into_weight(homogeneous) is homogeneous
    pair = cp.into_weight((3.0, 2.0))
    assert (pair.element, pair.rational) == (6.0, 2.0)
    infinite = cp.into_weight([3.0, 0.0])
    assert infinite.is_infinite()
    plain = cp.into_weight(5.0)
    assert (plain.element, plain.rational) == (5.0, 1.0)


# ----------------------------------------------------------- #
# Lifting and projection
# ----------------------------------------------------------- #
def test_weights_chain():
    weights = cp.Weights(cp.Elements([(1.0, 1.0), (2.0, 4.0), (3.0, 0.0)]))
    assert len(weights) == 3
    assert weights.eval(1).element == 8.0
    assert weights.eval(2).is_infinite()


def test_weights_rejects_zero_weight_when_asked():
    with pytest.raises(cp.WeightOfZero) as error:
        cp.Weights(cp.Elements([(1.0, 1.0), (2.0, 0.0)]), allow_infinite=False)
    assert error.value.index == 1
    assert isinstance(error.value, cp.LinearError)


def test_weighted_forwards_metadata():
    curve = cp.Linear([0.0, 2.0], cp.Weights(cp.Elements([(1.0, 1.0), (2.0, 1.0)])))
    weighted = cp.Weighted(curve)
    assert weighted.domain() == (0.0, 2.0)
    assert float(weighted.eval(1.0)) == pytest.approx(1.5)

    chain = cp.Weighted(cp.Weights(cp.Elements([(1.0, 2.0), (3.0, 4.0)])))
    assert len(chain) == 2
    assert [float(value) for value in chain] == pytest.approx([1.0, 3.0])
