import numpy as np
import pytest

import curvespy as cp


# ----------------------------------------------------------- #
# Evaluation
# ----------------------------------------------------------- #
def test_linear_uniform():
    curve = (
        cp.Linear.builder()
        .elements([20.0, 100.0, 0.0, 200.0])
        .equidistant()
        .normalized()
        .build()
    )
    expected = [20.0, 60.0, 100.0, 50.0, 0.0, 100.0, 200.0]
    np.testing.assert_allclose(list(curve.take(7)), expected, atol=1e-9)


def test_linear_extrapolation():
    curve = cp.Linear([1.0, 2.0, 3.0, 4.0], [20.0, 100.0, 0.0, 200.0])
    assert curve.eval(-1.0) == pytest.approx(-140.0)
    assert curve.eval(1.5) == pytest.approx(60.0)
    assert curve.eval(2.5) == pytest.approx(50.0)
    assert curve.eval(5.0) == pytest.approx(400.0)


def test_linear_interpolates_elements_at_knots():
    knots = [0.0, 0.3, 0.35, 2.0, 7.5]
    elements = [1.0, -4.0, 2.5, 0.0, 9.0]
    curve = cp.Linear(knots, elements)
    assert curve.domain() == (0.0, 7.5)
    for knot, element in zip(knots, elements):
        assert curve.eval(knot) == pytest.approx(element)


def test_linear_two_elements():
    curve = cp.Linear([0.0, 1.0], [0.0, 3.0])
    np.testing.assert_allclose(list(curve.take(4)), [0.0, 1.0, 2.0, 3.0], atol=1e-9)


def test_linear_equidistant_matches_explicit_knots():
    elements = [1.0, 5.0, 100.0]
    equidistant = cp.Linear.builder().elements(elements).equidistant().normalized().build()
    explicit = cp.Linear([0.0, 0.5, 1.0], elements)
    np.testing.assert_allclose(list(equidistant.take(5)), [1.0, 3.0, 5.0, 52.5, 100.0], atol=1e-9)
    np.testing.assert_allclose(list(equidistant.take(17)), list(explicit.take(17)), atol=1e-12)


def test_linear_equidistant_domain_and_distance():
    elements = [0.0, 1.0, 4.0]
    by_domain = cp.Linear.builder().elements(elements).equidistant().domain(2.0, 4.0).build()
    by_distance = cp.Linear.builder().elements(elements).equidistant().distance(2.0, 1.0).build()
    assert by_domain.domain() == (2.0, 4.0)
    assert by_distance.domain() == (2.0, 4.0)
    assert by_domain.eval(3.5) == pytest.approx(2.5)
    assert by_distance.eval(3.5) == pytest.approx(2.5)


def test_linear_of_points():
    points = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 2.0]])
    curve = cp.Linear([0.0, 1.0, 2.0], points)
    np.testing.assert_allclose(curve.eval(0.5), [0.5, 1.0])
    np.testing.assert_allclose(curve.eval(1.5), [2.0, 2.0])


def test_weighted_linear():
    curve = (
        cp.Linear.builder()
        .elements_with_weights([(1.0, 1.0), (2.0, 4.0), (3.0, 0.0)])
        .equidistant()
        .normalized()
        .build()
    )
    assert isinstance(curve, cp.Weighted)
    values = [float(value) for value in curve.take(5)]
    np.testing.assert_allclose(values, [1.0, 1.8, 2.0, 2.75, np.inf])


def test_weighted_linear_from_homogeneous_elements():
    curve = (
        cp.Linear.builder()
        .elements_with_weights(
            [
                cp.Homogeneous(1.0),
                cp.Homogeneous.weighted_unchecked(2.0, 2.0),
                cp.Homogeneous.infinity(3.0),
            ]
        )
        .knots([1.0, 2.0, 3.0])
        .build()
    )
    assert float(curve.eval(2.0)) == pytest.approx(2.0)


def test_linear_builder_with_easing():
    curve = (
        cp.Linear.builder()
        .elements([0.0, 10.0])
        .knots([0.0, 1.0])
        .easing(cp.Plateau(0.5))
        .build()
    )
    assert curve.eval(0.2) == pytest.approx(0.0)
    assert curve.eval(0.5) == pytest.approx(5.0)
    assert curve.eval(0.9) == pytest.approx(10.0)


# ----------------------------------------------------------- #
# Construction errors
# ----------------------------------------------------------- #
def test_linear_errors():
    with pytest.raises(cp.TooFewElements) as error:
        cp.Linear([1.0], [1.0])
    assert error.value.found == 1
    with pytest.raises(cp.KnotElementInequality) as error:
        cp.Linear([1.0, 2.0, 3.0], [1.0, 2.0])
    assert (error.value.elements, error.value.knots) == (2, 3)
    with pytest.raises(cp.NotSorted):
        cp.Linear([2.0, 1.0], [1.0, 2.0])


def test_linear_new_and_unchecked():
    curve = cp.Linear.new([0.0, 1.0], [0.0, 2.0])
    assert curve.eval(0.5) == pytest.approx(1.0)
    unchecked = cp.Linear.new_unchecked([0.0, 1.0, 2.0], [0.0, 2.0])
    assert unchecked.eval(0.5) == pytest.approx(1.0)


def test_linear_builder_errors_are_raised_from_build():
    builder = cp.Linear.builder().elements([]).knots([])
    with pytest.raises(cp.Empty):
        builder.build()
    with pytest.raises(cp.TooFewElements):
        cp.Linear.builder().elements([1.0]).knots([1.0]).build()
    with pytest.raises(cp.KnotElementInequality):
        cp.Linear.builder().elements([1.0, 2.0]).knots([1.0, 2.0, 3.0]).build()
    with pytest.raises(cp.NotSorted):
        cp.Linear.builder().elements([1.0, 2.0]).knots([2.0, 1.0]).build()
    with pytest.raises(cp.WeightOfZero):
        (
            cp.Linear.builder()
            .elements_with_weights([(1.0, 1.0), (2.0, 0.0)], allow_infinite=False)
            .equidistant()
            .normalized()
            .build()
        )


def test_linear_director_raises_immediately():
    director = cp.LinearDirector()
    with pytest.raises(cp.KnotElementInequality):
        director.elements([1.0, 2.0]).knots([0.0])
    with pytest.raises(cp.BuilderStateError):
        director.knots([0.0, 1.0])
    with pytest.raises(cp.BuilderStateError):
        director.elements([1.0, 2.0]).build()
    with pytest.raises(cp.BuilderStateError):
        cp.Linear.builder().elements([1.0, 2.0]).normalized()
