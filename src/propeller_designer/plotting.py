"""
Propeller Designer Plotting Module
==================================

Visualization of generated performance maps.

Plot Types Available:
--------------------
- Thrust coefficient vs advance ratio (one line per pitch level)
- Power coefficient vs advance ratio
- Efficiency vs advance ratio

Usage:
-----
    from src.propeller_designer.plotting import PerformancePlotter

    plotter = PerformancePlotter()
    fig = plotter.plot_thrust_coefficient(design.performance)
    fig.savefig("ct.png", dpi=150)
"""

from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .sweep import PerformanceTable


class PerformancePlotter:
    """
    Performance map visualization class.

    Example:
    -------
        plotter = PerformancePlotter()
        fig = plotter.plot_efficiency(design.performance, title="C172 prop")
        plt.show()
    """

    DEFAULT_FIGURE_SIZE = (10, 6)
    DEFAULT_GRID = True
    DEFAULT_LEGEND_LOC = "best"

    _LABELS = {
        "CT": "Thrust coefficient CT",
        "CP": "Power coefficient CP",
        "efficiency": "Efficiency η",
    }

    def _plot_column(
        self,
        table: PerformanceTable,
        column: str,
        title: Optional[str],
        figsize: Optional[Tuple[int, int]],
        ax: Optional[Axes]
    ) -> Figure:
        """Plot one column of the table, one line per pitch level."""
        if ax is None:
            fig, ax = plt.subplots(1, figsize=figsize or self.DEFAULT_FIGURE_SIZE)
        else:
            fig = ax.get_figure()

        pivot = table.pivot(column)
        for pitch in pivot.columns:
            label = "design pitch" if table.fixed_pitch else f"pitch {pitch:+.0f}°"
            ax.plot(pivot.index, pivot[pitch], marker=".", label=label)

        ax.set_xlabel("Advance ratio J")
        ax.set_ylabel(self._LABELS[column])
        ax.set_title(title or self._LABELS[column])
        ax.grid(self.DEFAULT_GRID)
        ax.legend(loc=self.DEFAULT_LEGEND_LOC)

        return fig

    def plot_thrust_coefficient(
        self,
        table: PerformanceTable,
        title: Optional[str] = None,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot CT vs J for every pitch level.

        Parameters:
        ----------
        table : PerformanceTable
            Sweep result.

        title : str, optional
            Plot title.

        figsize : tuple, optional
            Figure size as (width, height) in inches.

        ax : matplotlib.axes.Axes, optional
            Existing axes to plot on. If None, creates new figure.

        Returns:
        -------
        matplotlib.figure.Figure
        """
        return self._plot_column(table, "CT", title, figsize, ax)

    def plot_power_coefficient(
        self,
        table: PerformanceTable,
        title: Optional[str] = None,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """Plot CP vs J for every pitch level."""
        return self._plot_column(table, "CP", title, figsize, ax)

    def plot_efficiency(
        self,
        table: PerformanceTable,
        title: Optional[str] = None,
        figsize: Optional[Tuple[int, int]] = None,
        ax: Optional[Axes] = None
    ) -> Figure:
        """Plot η = J·CT/CP vs J for every pitch level."""
        return self._plot_column(table, "efficiency", title, figsize, ax)
