"""
===========================================================
plotting.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================
Plotting helpers for SIR trajectories.

Both functions only read the trajectory tables produced by
sirsim.simulate / sirsim.experiments.run_scenarios.
"""
import matplotlib.pyplot as plt
import pandas as pd
from typing import Optional
from matplotlib.axes import Axes

from .results import to_long

COLORS = {"S": "b", "I": "r", "R": "g"}
LABELS = {"S": "Susceptible", "I": "Infected", "R": "Recovered"}


def plot_trajectory(trajectory: pd.DataFrame,
                    ax: Optional[Axes] = None,
                    show: bool = False,
                    title: Optional[str] = None,
                    ylabel: str = "Fraction of population") -> Axes:
    """
    Plot S, I and R over time.

    Parameters
    ----------
    trajectory : pd.DataFrame
        Table with columns time, S, I, R
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, creates new figure
    show : bool
        Whether to display the plot immediately
    title : str, optional
        Custom title

    Returns
    -------
    ax : matplotlib.axes.Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    long = to_long(trajectory)
    for comp, sub in long.groupby("compartment", sort=False):
        ax.plot(sub["time"], sub["value"], color=COLORS[comp], linewidth=2, label=LABELS[comp])

    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel(ylabel, fontsize=12)
    ax.set_title(title if title else "SIR Model Dynamics", fontsize=14)
    ax.legend(fontsize=11)
    ax.grid(True, alpha=0.3)

    if show:
        plt.tight_layout()
        plt.show()
    return ax


def plot_infected_by_r0(runs: pd.DataFrame,
                        ax: Optional[Axes] = None,
                        show: bool = False) -> Axes:
    """I(t) for each R0 in the output of run_scenarios"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    for R0, sub in runs.groupby("R0"):
        ax.plot(sub["time"], sub["I"], linewidth=2, label=f"$R_0$ = {R0:.2f}")

    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Infected", fontsize=12)
    ax.set_title("Infected over time by $R_0$", fontsize=14)
    ax.legend(fontsize=11)
    ax.grid(True, alpha=0.3)

    if show:
        plt.tight_layout()
        plt.show()
    return ax
