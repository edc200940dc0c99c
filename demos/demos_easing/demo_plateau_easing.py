"""Example showing how easing functions reshape a linear interpolation."""

# -------------------------------------------------------------------------------------------------------------------- #
# Imports
# -------------------------------------------------------------------------------------------------------------------- #
import matplotlib.pyplot as plt
import curvespy as cp


# -------------------------------------------------------------------------------------------------------------------- #
# Linear interpolation with different easings
# -------------------------------------------------------------------------------------------------------------------- #
elements = [0.0, 1.0, 0.5, 2.0]
easings = {
    "identity": None,
    "smoothstep": cp.smoothstep,
    "smootherstep": cp.smootherstep,
    "plateau 0.5": cp.Plateau(0.5),
    "plateau 1.0": cp.Plateau(1.0),
}

# Plot every variant in the same axes
cp.set_plot_options(fontsize=12)
fig, ax = cp.create_figure(1)
colors = ["black", "red", "blue", "green", "orange"]
for (name, easing), color in zip(easings.items(), colors):
    builder = cp.Linear.builder().elements(elements).equidistant().normalized()
    if easing is not None:
        builder = builder.easing(easing)
    curve = builder.build()
    fig, ax = cp.plot_curve(curve, fig, ax, color=color)
    ax.get_lines()[-1].set_label(name)
ax.legend(loc="upper left")

# Every easing keeps the knots fixed
knot_values = [round(float(curve.eval(x)), 12) for x in (0.0, 1 / 3, 2 / 3, 1.0)]
print(f"Values at the knots with the strongest plateau: {knot_values}")


# -------------------------------------------------------------------------------------------------------------------- #
# Show figures
# -------------------------------------------------------------------------------------------------------------------- #
plt.show()
