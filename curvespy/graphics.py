import jax.numpy as jnp
import matplotlib as mpl
import matplotlib.pyplot as plt


def set_plot_options(fontsize=12, grid=True):
    """Set the matplotlib options used by the plotting functions of the package"""
    mpl.rcParams["font.size"] = fontsize
    mpl.rcParams["axes.titlesize"] = fontsize
    mpl.rcParams["axes.labelsize"] = fontsize
    mpl.rcParams["xtick.labelsize"] = fontsize - 2
    mpl.rcParams["ytick.labelsize"] = fontsize - 2
    mpl.rcParams["legend.fontsize"] = fontsize - 2
    mpl.rcParams["axes.grid"] = grid
    mpl.rcParams["grid.linestyle"] = ":"
    mpl.rcParams["grid.alpha"] = 0.5
    mpl.rcParams["lines.linewidth"] = 1.5


# ----------------------------------------------------------- #
# Figures
# ----------------------------------------------------------- #
def create_figure(ndim):
    """Create a figure with axes labelled for curves of `ndim` dimensions"""

    # One dimension (value against parameter)
    if ndim == 1:
        fig = plt.figure(figsize=(6, 5))
        ax = fig.add_subplot(111)
        ax.set_xlabel("$u$ parameter", labelpad=12)
        ax.set_ylabel("Curve value", labelpad=12)

    # Two dimensions (plane curve)
    elif ndim == 2:
        fig = plt.figure(figsize=(6, 5))
        ax = fig.add_subplot(111)
        ax.set_xlabel("$x$ axis", labelpad=12)
        ax.set_ylabel("$y$ axis", labelpad=12)
        ax.set_aspect(1.0)

    # Three dimensions (space curve)
    elif ndim == 3:
        fig = plt.figure(figsize=(6, 5))
        ax = fig.add_subplot(111, projection="3d")
        ax.view_init(azim=-120, elev=30)
        ax.grid(False)
        ax.xaxis.pane.fill = False
        ax.yaxis.pane.fill = False
        ax.zaxis.pane.fill = False
        ax.set_xlabel("$x$ axis", labelpad=12)
        ax.set_ylabel("$y$ axis", labelpad=12)
        ax.set_zlabel("$z$ axis", labelpad=12)

    else:
        raise ValueError(f"The number of dimensions must be 1, 2 or 3, got {ndim}")

    return fig, ax


def _as_points(values):
    """Stack sampled elements into an array of shape (N, ndim)"""
    points = jnp.stack([jnp.atleast_1d(jnp.asarray(value)) for value in values])
    return jnp.reshape(points, (points.shape[0], -1))


# ----------------------------------------------------------- #
# Curves and control points
# ----------------------------------------------------------- #
def plot_curve(
    curve,
    fig=None,
    ax=None,
    n_points=201,
    linewidth=1.5,
    linestyle="-",
    color="black",
):
    """Plot a curve sampled at `n_points` equidistant points of its domain

    Scalar curves are plotted against their parameter, curves of points with two or
    three coordinates are plotted in the plane or in space.

    Returns
    -------
    fig, ax
        Handles of the figure and the axes.
    """
    points = _as_points(curve.take(n_points))
    ndim = points.shape[1]
    if fig is None:
        fig, ax = create_figure(ndim)

    if ndim == 1:
        start, end = curve.domain()
        u = jnp.linspace(start, end, n_points)
        (line,) = ax.plot(u, points[:, 0])
    else:
        (line,) = ax.plot(*points.T)
    line.set_linewidth(linewidth)
    line.set_linestyle(linestyle)
    line.set_color(color)
    line.set_marker(" ")

    return fig, ax


def plot_control_points(
    elements,
    fig=None,
    ax=None,
    linewidth=1.25,
    linestyle="-.",
    color="red",
    markersize=5,
    markerstyle="o",
):
    """Plot the control polygon of a curve

    Scalar elements are placed at equidistant parameters over [0, 1].

    Returns
    -------
    fig, ax
        Handles of the figure and the axes.
    """
    points = _as_points(elements)
    ndim = points.shape[1]
    if fig is None:
        fig, ax = create_figure(ndim)

    if ndim == 1:
        u = jnp.linspace(0.0, 1.0, points.shape[0])
        (line,) = ax.plot(u, points[:, 0])
    else:
        (line,) = ax.plot(*points.T)
    line.set_linewidth(linewidth)
    line.set_linestyle(linestyle)
    line.set_color(color)
    line.set_marker(markerstyle)
    line.set_markersize(markersize)
    line.set_markeredgewidth(linewidth)
    line.set_markeredgecolor(color)
    line.set_markerfacecolor("w")
    line.set_zorder(4)

    return fig, ax
