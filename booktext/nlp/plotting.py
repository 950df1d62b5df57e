# usage: bar charts for term frequencies and per-chapter sentiment (matplotlib)
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # files only, no display
import matplotlib.pyplot as plt
import pandas as pd


def plot_term_frequencies(freq: pd.DataFrame, out_path: Path, *, topn: int = 20, title: str = "Most common words") -> Path:
    """Horizontal bar chart of the `topn` rows of a term/count table."""
    top = freq.head(topn).iloc[::-1]
    fig, ax = plt.subplots(figsize=(8, max(3, 0.3 * len(top) + 1)))
    ax.barh(top["term"].astype(str), top["count"], color="steelblue")
    ax.set_xlabel("count")
    ax.set_title(title)
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_sentiment_balance(balance: pd.DataFrame, out_path: Path, *, unit: str = "chapter_index",
                           title: str = "Net sentiment by chapter") -> Path:
    """Bars of net = positive - negative per unit, coloured by sign."""
    colors = ["seagreen" if v >= 0 else "firebrick" for v in balance["net"]]
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(balance[unit].astype(str), balance["net"], color=colors)
    ax.axhline(0, color="black", linewidth=0.8)
    ax.set_xlabel(unit)
    ax.set_ylabel("positive - negative")
    ax.set_title(title)
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
