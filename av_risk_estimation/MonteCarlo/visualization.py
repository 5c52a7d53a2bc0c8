"""Visualization of policy-evaluation convergence."""

from typing import List, Optional
import numpy as np
import matplotlib.pyplot as plt

from .data_structures import ConvergenceResult


def plot_convergence(
    results: List[ConvergenceResult],
    save_path: Optional[str] = None,
    show: bool = True,
    title: str = "Convergence of Probability Models"
):
    """Plot MSE against ground truth over evaluation iterations.

    Each estimator is drawn as a solid line, with its ideal (best linear
    correction) error as a dashed line of the same color.

    Parameters
    ----------
    results : list of ConvergenceResult
        One result per evaluated estimator
    save_path : str, optional
        Path to save figure (e.g., "images/convergence.pdf")
    show : bool
        Whether to display the figure

    Returns
    -------
    matplotlib.figure.Figure or None
        The figure, or None if there was nothing to plot
    """
    if not results:
        print("No results to plot")
        return None

    fig, ax = plt.subplots(figsize=(8, 5))
    colors = plt.rcParams['axes.prop_cycle'].by_key()['color']

    for i, result in enumerate(results):
        color = colors[i % len(colors)]
        iterations = np.arange(len(result.errors))
        ax.plot(iterations, result.errors, label=result.name, color=color)

        if result.ideal_error is not None:
            ax.plot(
                iterations,
                np.full(len(iterations), result.ideal_error),
                label=f"{result.name} -- ideal",
                color=color,
                linestyle='--'
            )

    episodes = results[0].episodes_per_iteration
    ax.set_xlabel(f'Number of iterations ({episodes} eps each)')
    ax.set_ylabel('MSE')
    ax.set_title(title)
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    if show:
        plt.show()

    return fig
