"""Shared fixtures: synthetic white-wine tables and CSV files in the UCI layout."""

import sys
from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

sys.path.insert(0, str(Path(__file__).parent.parent))

from wineml.data_loader import WINE_COLUMNS

UCI_HEADER = ";".join(
    f'"{name}"' for name in [
        "fixed acidity", "volatile acidity", "citric acid", "residual sugar",
        "chlorides", "free sulfur dioxide", "total sulfur dioxide", "density",
        "pH", "sulphates", "alcohol", "quality",
    ]
)

RANGES = {
    'fixed_acidity': (4.0, 10.0),
    'volatile_acidity': (0.1, 0.6),
    'citric_acid': (0.0, 0.6),
    'residual_sugar': (0.6, 20.0),
    'chlorides': (0.01, 0.1),
    'free_sulfur_dioxide': (5.0, 80.0),
    'total_sulfur_dioxide': (50.0, 250.0),
    'density': (0.987, 1.002),
    'ph': (2.8, 3.6),
    'sulphates': (0.3, 0.8),
    'alcohol': (8.0, 14.0),
}


def make_wine_frame(n_samples: int, seed: int) -> pd.DataFrame:
    """Random wines whose quality is driven by alcohol alone (3..9)."""
    rng = np.random.default_rng(seed)
    data = {
        col: np.round(rng.uniform(low, high, n_samples), 4)
        for col, (low, high) in RANGES.items()
    }
    data['quality'] = np.clip(np.round(3 + (data['alcohol'] - 8.0)), 3, 9)
    return pd.DataFrame(data, columns=WINE_COLUMNS)


def write_wine_csv(df: pd.DataFrame, path: Path, header: bool = True) -> Path:
    body = df.to_csv(sep=";", header=False, index=False)
    text = (UCI_HEADER + "\n" + body) if header else body
    path.write_text(text)
    return path


@pytest.fixture(scope="session")
def train_df():
    return make_wine_frame(400, seed=0)


@pytest.fixture(scope="session")
def validate_df():
    return make_wine_frame(150, seed=1)


@pytest.fixture
def data_dir(tmp_path, train_df, validate_df):
    """A working directory holding Data/ with the train and validate files."""
    data = tmp_path / "Data"
    data.mkdir()
    write_wine_csv(train_df, data / "winequality-white-train.csv")
    write_wine_csv(validate_df, data / "winequality-white-validate.csv")
    return tmp_path
