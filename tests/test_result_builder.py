from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from solar_yield.result_builder import (
    HISTORY_COLUMNS,
    ResultBuilder,
    history_frame,
    summarize_history,
)
from solar_yield.simulation.history import HistoricalRecord


def _records() -> list[HistoricalRecord]:
    return [
        HistoricalRecord(date(2024, 5, 31), 10.0, 80.0, 900, False, "Clear"),
        HistoricalRecord(date(2024, 6, 1), 6.5, 75.5, 600, True, "Rainy"),
        HistoricalRecord(date(2024, 6, 2), 8.0, 70.0, 700, True, "Cloudy"),
    ]


def test_history_frame_columns():
    df = history_frame(_records())
    assert list(df.columns) == HISTORY_COLUMNS
    assert pd.api.types.is_datetime64_any_dtype(df["date"])


def test_summarize_history():
    summary = summarize_history(history_frame(_records()))
    assert summary["days"] == 3
    assert summary["totalEnergy"] == pytest.approx(24.5)
    assert summary["averageEnergy"] == pytest.approx(8.17)
    assert summary["averageEfficiency"] == pytest.approx(75.2)
    assert summary["peakEnergy"] == pytest.approx(10.0)
    assert summary["lowestEnergy"] == pytest.approx(6.5)
    assert summary["averageIrradiance"] == 733
    assert summary["monsoonDays"] == 2
    assert summary["conditions"] == {"Clear": 1, "Rainy": 1, "Cloudy": 1}


def test_summarize_empty_history():
    summary = summarize_history(history_frame([]))
    assert summary["days"] == 0
    assert summary["conditions"] == {}


def test_export_history_csv(tmp_path):
    path = ResultBuilder().export_history_csv(_records(), tmp_path / "out" / "history.csv")
    df = pd.read_csv(path)
    assert len(df) == 3
    assert df.loc[0, "date"] == "2024-05-31"
    assert list(df["weatherCondition"]) == ["Clear", "Rainy", "Cloudy"]


def test_save_history_report(tmp_path):
    run_dir = ResultBuilder(output_root=tmp_path).save_history_report("Navi Mumbai", _records())
    assert run_dir.parent == tmp_path
    assert run_dir.name.endswith("Navi_Mumbai_history")
    assert (run_dir / "history.csv").exists()
    assert (run_dir / "history.png").exists()
