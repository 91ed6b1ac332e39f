"""
Visualization for compressor experiment results.

Dark theme shared by every chart. Intake series are drawn in blue,
outlet series in red, one figure row per recorded quantity.
"""

import matplotlib.pyplot as plt
from .simulation import ExperimentResult

# color palette
C = {
    "blue":      "#7EC8E3",
    "red":       "#C2506A",
    "yellow":    "#eab308",
    "green":     "#22c55e",
    "orange":    "#f97316",
    "bg":        "#0e1117",
    "grid":      "#21262d",
    "zeroline":  "#30363d",
    "text":      "#c9d1d9",
    "text_sec":  "#8b949e",
}

# (result attribute prefix, axis label) per chart
QUANTITIES = [
    ("moles",       "Mols [mol]"),
    ("pressure",    "Pressure [Pa]"),
    ("temperature", "Temperature [K]"),
]


def _apply_theme(ax, title: str = "", xlabel: str = "", ylabel: str = ""):
    """Apply dark engineering theme to an axis."""
    ax.set_facecolor(C["bg"])
    ax.figure.patch.set_facecolor(C["bg"])

    if title:
        ax.set_title(title, color=C["text"], fontsize=13,
                     fontfamily="sans-serif", pad=12)
    if xlabel:
        ax.set_xlabel(xlabel, color=C["text_sec"], fontsize=11)
    if ylabel:
        ax.set_ylabel(ylabel, color=C["text_sec"], fontsize=11)

    ax.tick_params(colors=C["text_sec"], labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(C["zeroline"])
    ax.grid(True, color=C["grid"], linewidth=0.5, alpha=0.7)


def _legend(ax):
    ax.legend(facecolor="#161b22", edgecolor=C["zeroline"], labelcolor=C["text"])


def plot_series(result: ExperimentResult, quantity: str, ax=None) -> plt.Figure:
    """
    One quantity over cycles, intake ("In") against outlet ("Out").
    quantity: "moles", "pressure" or "temperature".
    """
    labels = dict(QUANTITIES)
    if quantity not in labels:
        raise ValueError(f"Unknown quantity {quantity!r}, expected one of {list(labels)}")

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))
    else:
        fig = ax.figure

    t = result.cycle
    title = labels[quantity].split(" [")[0]
    ax.plot(t, getattr(result, f"intake_{quantity}"), color=C["blue"],
            linewidth=2, label=f"{title} In")
    ax.plot(t, getattr(result, f"outlet_{quantity}"), color=C["red"],
            linewidth=2, label=f"{title} Out")

    _apply_theme(ax, title=f"{title} over Time", xlabel="Cycle",
                 ylabel=labels[quantity])
    _legend(ax)
    return fig


def plot_experiment(result: ExperimentResult) -> plt.Figure:
    """Moles, pressure and temperature stacked on a shared cycle axis."""
    fig, axes = plt.subplots(len(QUANTITIES), 1, figsize=(10, 10), sharex=True)

    for ax, (quantity, _) in zip(axes, QUANTITIES):
        plot_series(result, quantity, ax=ax)

    # energy-limited strokes, if any, marked on the pressure chart
    limited = result.cycle[result.energy_limited]
    for c in limited:
        axes[1].axvline(x=c, color=C["yellow"], linewidth=0.5, alpha=0.3)

    fig.tight_layout()
    return fig
