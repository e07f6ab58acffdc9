# src/utils/figures.py
from pathlib import Path

import matplotlib.pyplot as plt


def save_figure(fig, path, dpi: int = 300):
    """
    Write a figure to disk and close it.

    Returns the path on success. A failed write is reported as a warning
    and returns None; callers keep their in-memory results either way.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    except OSError as exc:
        print(f"[WARN] Could not save figure {path}: {exc}")
        return None
    finally:
        plt.close(fig)
    print(f"[INFO] Saved figure: {path}")
    return path
