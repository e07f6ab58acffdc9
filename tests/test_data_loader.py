from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pandas as pd
from pandas.testing import assert_frame_equal
import pytest

from src.data import data_loader as dl_mod
from src.data.data_loader import COLUMN_LABELS, FEATURES, TARGET, DataLoader


def test_load_data_missing_file_without_fetch(tmp_path):
    loader = DataLoader(str(tmp_path / "missing.csv"), fetch_if_missing=False)
    with pytest.raises(FileNotFoundError):
        loader.load_data()


def test_load_data_missing_required_columns(tmp_path, raw_boston):
    bad_path = tmp_path / "incomplete.csv"
    raw_boston.drop(columns=["LSTAT"]).to_csv(bad_path, index=False)

    loader = DataLoader(str(bad_path))
    with pytest.raises(ValueError, match="LSTAT"):
        loader.load_data()


def test_load_data_accepts_lowercase_columns(tmp_path, raw_boston):
    path = tmp_path / "lower.csv"
    raw_boston.rename(columns=str.lower).to_csv(path, index=False)

    df = DataLoader(str(path)).load_data()
    assert df.shape == (506, 14)


def test_preprocess_renames_and_orders_columns(raw_boston):
    shuffled = raw_boston[list(reversed(raw_boston.columns))]

    processed = DataLoader("unused.csv").preprocess(shuffled)

    assert list(processed.columns) == FEATURES + [TARGET]
    assert list(processed.columns) == list(COLUMN_LABELS.values())
    assert processed.columns[-1] == "Home_Value"
    assert len(FEATURES) == 13
    assert all(pd.api.types.is_float_dtype(t) for t in processed.dtypes)
    np.testing.assert_allclose(processed["Rooms"].to_numpy(), raw_boston["RM"].to_numpy())


def test_preprocess_rejects_missing_values(raw_boston):
    raw_boston.loc[3, "AGE"] = np.nan
    with pytest.raises(ValueError, match="Age"):
        DataLoader("unused.csv").preprocess(raw_boston)


def test_preprocess_does_not_mutate_input(raw_boston):
    before = raw_boston.copy()
    DataLoader("unused.csv").preprocess(raw_boston)
    assert_frame_equal(raw_boston, before)


def test_fetch_dataset_casts_categoricals_and_caches(tmp_path, monkeypatch, raw_boston):
    frame = raw_boston.copy()
    frame["CHAS"] = frame["CHAS"].astype(int).astype(str).astype("category")
    frame["RAD"] = frame["RAD"].astype(int).astype(str).astype("category")

    calls = {}

    def fake_fetch_openml(**kwargs):
        calls.update(kwargs)
        return SimpleNamespace(frame=frame)

    monkeypatch.setattr(dl_mod, "fetch_openml", fake_fetch_openml)

    cache = tmp_path / "raw" / "boston.csv"
    loader = DataLoader(str(cache))
    df = loader.load_data()

    assert calls["name"] == "boston"
    assert cache.exists()
    assert pd.api.types.is_float_dtype(df["CHAS"])
    assert pd.api.types.is_float_dtype(df["RAD"])
    assert set(df["RAD"].unique()) <= {1.0, 2.0, 4.0, 5.0, 8.0, 24.0}


def test_run_processes_and_persists_renamed_csv(tmp_path, raw_boston):
    input_path = tmp_path / "raw" / "boston.csv"
    input_path.parent.mkdir()
    raw_boston.to_csv(input_path, index=False)

    loader = DataLoader(str(input_path), fetch_if_missing=False)
    processed = loader.run()

    output_path = Path(loader.output_path)
    assert output_path.exists()

    saved = pd.read_csv(output_path)
    assert_frame_equal(saved, processed.reset_index(drop=True), check_dtype=False)
