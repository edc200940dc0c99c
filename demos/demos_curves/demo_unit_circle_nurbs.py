"""Example showing how to represent the unit circle with a weighted B-spline and verify its radius."""

# -------------------------------------------------------------------------------------------------------------------- #
# Imports
# -------------------------------------------------------------------------------------------------------------------- #
import numpy as np
import jax.numpy as jnp
import matplotlib.pyplot as plt
import curvespy as cp


# -------------------------------------------------------------------------------------------------------------------- #
# Unit circle as a quadratic rational B-spline
# -------------------------------------------------------------------------------------------------------------------- #
P = jnp.array([[1, 0], [1, 1], [0, 1], [-1, 1], [-1, 0], [-1, -1], [0, -1], [1, -1], [1, 0]], dtype=float)
W = jnp.array([1.0, np.sqrt(2) / 2] * 4 + [1.0])
U = [0.0, 0.0, 1.0, 1.0, 2.0, 2.0, 3.0, 3.0, 4.0, 4.0]   # Normalized knots (first and last knot left out)

# Create the curve with the staged builder
circle = (
    cp.BSpline.builder()
    .elements_with_weights(list(zip(P, W)))
    .knots(U)
    .dynamic()
    .build()
)

# Plot the curve and its control polygon
fig, ax = cp.plot_curve(circle)
fig, ax = cp.plot_control_points(P, fig, ax)

# Evaluate along the curve with the generic kernel and the vectorized kernel
points = jnp.stack(list(circle.take(100)))
points_jax = cp.compute_rational_bspline_values(P, W, jnp.asarray(U), 2, jnp.linspace(0.0, 4.0, 100))

# Report results
radius = jnp.linalg.norm(points, axis=1)
print("\n=== Unit circle check ===")
print(f"Domain of the curve            : {circle.domain()}")
print(f"Radius RMS error               : {float(jnp.sqrt(jnp.mean((radius - 1.0)**2))):.3e}")
print(f"Generic vs vectorized max diff : {float(jnp.max(jnp.abs(points - points_jax))):.3e}")


# -------------------------------------------------------------------------------------------------------------------- #
# Show figures
# -------------------------------------------------------------------------------------------------------------------- #
plt.show()
