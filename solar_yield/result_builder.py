from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from .simulation.history import HistoricalRecord  # noqa: E402

HISTORY_COLUMNS = ["date", "energy", "efficiency", "solarIrradiance", "isMonsoon", "weatherCondition"]


def _slugify(value: str) -> str:
    """
    Convert a free-form string into a filesystem-safe slug.
    """
    return "".join(c if c.isalnum() or c in ("-", "_") else "_" for c in value.strip()).strip("_")


def history_frame(records: Iterable[HistoricalRecord]) -> pd.DataFrame:
    """
    Tabulate historical records, one row per day.

    Args:
        records: Records in ascending date order.

    Returns:
        DataFrame with the JSON column names and a datetime ``date`` column.
    """
    df = pd.DataFrame([r.to_dict() for r in records], columns=HISTORY_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def summarize_history(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Dashboard statistics of a historical series.

    Returns:
        Dictionary with total/average/peak/lowest energy, average efficiency,
        monsoon day count and the condition histogram.
    """
    if df.empty:
        return {
            "days": 0,
            "totalEnergy": 0.0,
            "averageEnergy": 0.0,
            "averageEfficiency": 0.0,
            "peakEnergy": 0.0,
            "lowestEnergy": 0.0,
            "averageIrradiance": 0.0,
            "monsoonDays": 0,
            "conditions": {},
        }
    return {
        "days": int(len(df)),
        "totalEnergy": round(float(df["energy"].sum()), 1),
        "averageEnergy": round(float(df["energy"].mean()), 2),
        "averageEfficiency": round(float(df["efficiency"].mean()), 1),
        "peakEnergy": round(float(df["energy"].max()), 1),
        "lowestEnergy": round(float(df["energy"].min()), 1),
        "averageIrradiance": round(float(df["solarIrradiance"].mean())),
        "monsoonDays": int(df["isMonsoon"].sum()),
        "conditions": {str(k): int(v) for k, v in df["weatherCondition"].value_counts().items()},
    }


def _plot_history(df: pd.DataFrame, location: str, save_path: Path) -> None:
    """
    Plot daily energy bars with the efficiency line on a secondary axis.
    """
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(df["date"], df["energy"], color="#f5a623", alpha=0.7, label="Energy (kWh)")
    ax.set_xlabel("Date")
    ax.set_ylabel("Energy (kWh)")
    ax.grid(True, alpha=0.3)

    ax_eff = ax.twinx()
    ax_eff.plot(df["date"], df["efficiency"], color="#2e7d32", marker="o", markersize=3, label="Efficiency (%)")
    ax_eff.set_ylabel("Efficiency (%)")
    ax_eff.set_ylim(55, 100)

    ax.set_title(f"Solar production history - {location}")
    fig.autofmt_xdate()
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)


class ResultBuilder:
    """
    Writes CLI outputs (CSV series, summary JSON-ready dict, chart) to disk.
    """

    def __init__(self, output_root: Path | str = Path("results")) -> None:
        self.output_root = Path(output_root)

    def _run_directory(self, location: str) -> Path:
        timestamp = datetime.now().strftime("%y%m%d_%H%M%S")
        run_dir = self.output_root / f"{timestamp}_{_slugify(location) or 'location'}_history"
        run_dir.mkdir(parents=True, exist_ok=True)
        return run_dir

    def export_history_csv(self, records: Iterable[HistoricalRecord], path: Path | str) -> Path:
        """Write the series to ``path`` as CSV and return the path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        df = history_frame(records)
        df["date"] = df["date"].dt.strftime("%Y-%m-%d")
        df.to_csv(target, index=False)
        return target

    def save_history_report(self, location: str, records: Iterable[HistoricalRecord]) -> Path:
        """
        Save CSV and chart of a series into a timestamped directory.

        Returns:
            The directory containing ``history.csv`` and ``history.png``.
        """
        items = list(records)
        run_dir = self._run_directory(location)
        self.export_history_csv(items, run_dir / "history.csv")
        _plot_history(history_frame(items), location, run_dir / "history.png")
        return run_dir
