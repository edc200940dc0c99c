import os
os.environ["JAX_PLATFORM_NAME"] = "cpu"
import jax
jax.config.update("jax_enable_x64", True)

# Import curve modules
from .errors     import *
from .utils      import *
from .signal     import *
from .iterators  import *
from .adaptors   import *
from .knots      import *
from .space      import *
from .easing     import *
from .weights    import *
from .linear     import *
from .bezier     import *
from .bspline    import *
from .vectorized import *

from .graphics import *

# Package info
__version__ = "0.1.0"
PACKAGE_NAME = "curvespy"
URL_GITHUB = "https://github.com/turbo-sim/curvespy"
BREAKLINE = 80 * "-"


def print_banner():
    """Prints a banner."""
    banner = r"""

      _______  ________   _____  _________  __  __
     / ___/ / / / ___/ | / / _ \/ ___/ __ \/ / / /
    / /__/ /_/ / /   | |/ /  __(__  ) /_/ / /_/ /
    \___/\__,_/_/    |___/\___/____/ .___/\__, /
                                  /_/    /____/
    """
    print(BREAKLINE)
    print(banner)
    print(BREAKLINE)


def print_package_info():
    """Prints package information with predefined values."""

    info = f""" Version:       {__version__}
 Repository:    {URL_GITHUB}"""
    print_banner()
    print(BREAKLINE)
    print(info)
    print(BREAKLINE)


# Clamped B-spline minimal working example
def minimal_example():

    # Import packages
    import jax.numpy as jnp
    import matplotlib.pyplot as plt
    from .bspline import BSpline
    from .graphics import plot_control_points, plot_curve, set_plot_options
    print_package_info()
    set_plot_options()

    # Define the array of control points
    P = jnp.zeros((5, 2))
    P = P.at[0, :].set([0.20, 0.50])
    P = P.at[1, :].set([0.40, 0.70])
    P = P.at[2, :].set([0.80, 0.60])
    P = P.at[3, :].set([0.80, 0.40])
    P = P.at[4, :].set([0.40, 0.20])

    # Create and plot a cubic clamped B-spline
    curve = (
        BSpline.builder()
        .clamped()
        .elements(P)
        .equidistant()
        .degree(3)
        .normalized()
        .dynamic()
        .build()
    )
    fig, ax = plot_curve(curve)
    plot_control_points(P, fig, ax)
    plt.show()
