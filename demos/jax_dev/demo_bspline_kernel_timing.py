""" Example comparing the generic B-spline evaluation against the jitted array kernel """


# -------------------------------------------------------------------------------------------------------------------- #
# Importing packages
# -------------------------------------------------------------------------------------------------------------------- #
import time
import jax.numpy as jnp
import curvespy as cp


# -------------------------------------------------------------------------------------------------------------------- #
# Cubic clamped B-spline
# -------------------------------------------------------------------------------------------------------------------- #
# Control points of a planar curve
P = jnp.array([[0.0, 0.0], [0.2, 0.8], [0.5, 1.0], [0.8, 0.4], [1.0, 0.9], [1.3, 0.1], [1.6, 0.5]])

# Define the degree and the normalized knots (p repeated zeros and ones around the equidistant inner knots)
p = 3
n = P.shape[0]
U = jnp.concatenate((jnp.zeros(p - 1), jnp.linspace(0, 1, n - p + 1), jnp.ones(p - 1)))

# Curve assembled from the generic building blocks
curve = cp.BSpline(P, U)

# Parametrization used for the comparison
Nu = 500
u = jnp.linspace(0.00, 1.00, Nu)

# --------------------------------------------------------------------------------
# Timing: 10 steady-state runs
# --------------------------------------------------------------------------------
print("Timing 10 steady-state runs (in milliseconds):")
print(" idx |   Generic   |  Vectorized |  Max difference")
print("-----|-------------|-------------|----------------")

for k in range(10):
    t0 = time.perf_counter()
    C_generic = jnp.stack([curve.eval(float(x)) for x in u])
    t1 = time.perf_counter()
    C_vectorized = cp.compute_bspline_values(P, U, p, u).block_until_ready()
    t2 = time.perf_counter()
    error = float(jnp.max(jnp.abs(C_generic - C_vectorized)))
    print(f"{k:4d} | {(t1-t0)*1e3:11.3f} | {(t2-t1)*1e3:11.3f} | {error:14.3e}")
