"""
Visualization of Jelinski-Moranda fits.

Provides matplotlib plots for:
- Observed intervals against the model-expected intervals and forecast
- Reliability of the current failure-free period
"""

from typing import Any, Optional, Tuple
import numpy as np

# Check for visualization libraries
try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from .model import JelinskiMorandaModel


COLORS = {
    "observed": "#3b82f6",   # Blue
    "fitted": "#8b5cf6",     # Purple
    "forecast": "#f59e0b",   # Amber
    "reliability": "#22c55e",  # Green
}


def check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install with: pip install jmrel[plot]"
        )


def plot_intervals(
    model: JelinskiMorandaModel,
    steps: int = 5,
    title: str = "Inter-failure Intervals",
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None,
) -> Any:
    """
    Plot observed intervals with the fitted and forecast expectations.

    Args:
        model: Fitted JelinskiMorandaModel
        steps: Number of future intervals to forecast
        title: Plot title
        figsize: Figure size
        save_path: Path to save figure (optional)

    Returns:
        matplotlib figure
    """
    check_matplotlib()
    estimate = model.require_fit()
    seq = model.intervals

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(seq.indices, seq.values, 'o-', color=COLORS["observed"],
            label='Observed')
    ax.plot(seq.indices, model.fitted_intervals(), '--', color=COLORS["fitted"],
            label='Model expectation')

    forecast = model.predict_intervals(steps)
    if forecast:
        idx = np.arange(seq.n + 1, seq.n + len(forecast) + 1)
        ax.plot(idx, forecast, 's:', color=COLORS["forecast"],
                label=f'Forecast ({len(forecast)} steps)')

    k_text = "n/a" if estimate.k is None else f"{estimate.k:.4g}"
    stats_text = f"B = {estimate.b:.3f}\nK = {k_text}"
    ax.text(0.02, 0.98, stats_text, transform=ax.transAxes,
            fontsize=10, verticalalignment='top',
            bbox=dict(boxstyle='round', facecolor='white', alpha=0.8))

    ax.set_xlabel('Failure index i', fontsize=12)
    ax.set_ylabel('Interval X_i', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_reliability(
    model: JelinskiMorandaModel,
    horizon: Optional[float] = None,
    n_points: int = 200,
    title: str = "Reliability of Current Period",
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None,
) -> Any:
    """
    Plot R(t) = exp(-K·(B - n)·t) for the current failure-free period.

    Args:
        model: Fitted JelinskiMorandaModel
        horizon: Time span to plot (default: three mean times to failure,
            or the observed total time when no failure is expected)
        n_points: Number of curve points
        title: Plot title
        figsize: Figure size
        save_path: Path to save figure (optional)

    Returns:
        matplotlib figure
    """
    check_matplotlib()
    estimate = model.require_fit()

    if horizon is None:
        mttf = estimate.mean_time_to_next_failure
        if mttf is not None and np.isfinite(mttf) and mttf > 0:
            horizon = 3.0 * mttf
        else:
            horizon = max(estimate.sum_xi, 1.0)

    t = np.linspace(0.0, horizon, n_points)
    r = model.reliability(t)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(t, r, color=COLORS["reliability"], linewidth=2, label='R(t)')
    ax.set_ylim(0.0, 1.05)
    ax.set_xlabel('Time since last failure', fontsize=12)
    ax.set_ylabel('Reliability', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
