import random

import matplotlib.pyplot as plt
import numpy as np

from src.utils import env as env_mod
from src.utils import seeds
from src.utils.figures import save_figure

ENV_KEYS = ["ENV", "SEED", "EXPERIMENT_NAME", "MLFLOW_TRACKING_URI"]


def test_load_env_defaults_and_env_file(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    # With .env present
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "ENV=prod\nSEED=7\nEXPERIMENT_NAME=my-exp\nMLFLOW_TRACKING_URI=http://mlflow\n"
    )
    values = env_mod.load_env()
    assert values["ENV"] == "prod"
    assert values["SEED"] == 7
    assert values["EXPERIMENT_NAME"] == "my-exp"
    assert values["MLFLOW_TRACKING_URI"] == "http://mlflow"

    # Without .env, falls back to environment variables and defaults
    (tmp_path / ".env").unlink()
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("EXPERIMENT_NAME", "fallback-exp")
    values = env_mod.load_env()
    assert values["EXPERIMENT_NAME"] == "fallback-exp"
    assert values["ENV"] == "local"
    assert values["SEED"] == 123
    assert values["MLFLOW_TRACKING_URI"] is None


def test_set_global_seed_is_reproducible():
    seeds.set_global_seed(123)
    a = (random.random(), np.random.rand())
    seeds.set_global_seed(123)
    b = (random.random(), np.random.rand())
    assert a == b


def test_save_figure_creates_parent_dirs(tmp_path):
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])
    path = save_figure(fig, tmp_path / "nested" / "plot.png", dpi=50)
    assert path.exists()
    assert not plt.fignum_exists(fig.number)


def test_save_figure_warns_on_unwritable_target(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    fig, _ = plt.subplots()

    path = save_figure(fig, blocker / "plot.png", dpi=50)

    assert path is None
    assert "[WARN]" in capsys.readouterr().out
    assert not plt.fignum_exists(fig.number)
