"""Example showing degree elevation and derivatives of a planar Bezier curve."""

# -------------------------------------------------------------------------------------------------------------------- #
# Imports
# -------------------------------------------------------------------------------------------------------------------- #
import jax.numpy as jnp
import matplotlib.pyplot as plt
import curvespy as cp


# -------------------------------------------------------------------------------------------------------------------- #
# Degree elevation
# -------------------------------------------------------------------------------------------------------------------- #
P = jnp.array([[0.0, 0.0], [0.5, 1.5], [2.0, 1.0], [2.5, -0.5]])

# Create the cubic curve and elevate it twice
bezier = cp.Bezier(P)
elevated = bezier.elevate().elevate()

# Plot both control polygons on top of the curve
fig, ax = cp.plot_curve(bezier)
fig, ax = cp.plot_control_points(P, fig, ax)
fig, ax = cp.plot_control_points(elevated.elements, fig, ax, color="blue", markerstyle="s")

# Elevation keeps the shape of the curve
u = jnp.linspace(0.0, 1.0, 50)
error = max(float(jnp.max(jnp.abs(bezier.eval(float(x)) - elevated.eval(float(x))))) for x in u)
print("\n=== Degree elevation check ===")
print(f"Degree before / after          : {bezier.degree} / {elevated.degree}")
print(f"Max deviation after elevation  : {error:.3e}")


# -------------------------------------------------------------------------------------------------------------------- #
# Tangent vectors
# -------------------------------------------------------------------------------------------------------------------- #
for x in jnp.linspace(0.0, 1.0, 6):
    point, tangent = bezier.eval_with_tangent(float(x))
    ax.arrow(float(point[0]), float(point[1]), 0.2 * float(tangent[0]), 0.2 * float(tangent[1]),
             color="green", width=0.005, zorder=5)

# Compare with the vectorized derivatives
derivatives = cp.compute_bezier_derivatives(P, u, up_to_order=3)
generic = jnp.stack([jnp.stack(bezier.eval_with_derivatives(float(x), 3)) for x in u], axis=1)
print(f"Generic vs vectorized max diff : {float(jnp.max(jnp.abs(derivatives - generic))):.3e}")


# -------------------------------------------------------------------------------------------------------------------- #
# Show figures
# -------------------------------------------------------------------------------------------------------------------- #
plt.show()
