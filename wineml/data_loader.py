"""
Data Loader Module
==================

Handles configuration loading and ingestion of the wine-quality CSV files.

Functions:
    - load_config: Load YAML configuration merged over the defaults
    - resolve_data_path: Locate a data file under the Data directory
    - load_data: Load a semicolon-delimited CSV into the fixed wine schema
    - print_data_summary: Print basic statistics for a loaded dataset
"""

import copy
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Any, Optional, Union

import pandas as pd
import yaml

logger = logging.getLogger(__name__)

FEATURE_COLUMNS = [
    'fixed_acidity',
    'volatile_acidity',
    'citric_acid',
    'residual_sugar',
    'chlorides',
    'free_sulfur_dioxide',
    'total_sulfur_dioxide',
    'density',
    'ph',
    'sulphates',
    'alcohol',
]
TARGET_COLUMN = 'quality'
WINE_COLUMNS = FEATURE_COLUMNS + [TARGET_COLUMN]

DEFAULT_CONFIG: Dict[str, Any] = {
    'data': {
        'data_dir': 'Data',
        'train_file': 'winequality-white-train.csv',
        'validate_file': 'winequality-white-validate.csv',
        'separator': ';',
        'has_header': True,
    },
    'model': {
        'random_state': 42,
        'hyperparameters': {},
    },
    'prediction': {
        'sample': None,
    },
    'output': {
        'figures_path': None,
    },
    'logging': {
        'level': 'WARNING',
        'file': None,
    },
    'driver': {
        'wait_for_exit': True,
        'show_data_summary': False,
    },
}


class ParseError(ValueError):
    """Raised when a data file does not match the wine schema."""


@dataclass(frozen=True)
class WineSample:
    """One wine record: eleven physico-chemical features plus the quality label."""

    fixed_acidity: float
    volatile_acidity: float
    citric_acid: float
    residual_sugar: float
    chlorides: float
    free_sulfur_dioxide: float
    total_sulfur_dioxide: float
    density: float
    ph: float
    sulphates: float
    alcohol: float
    quality: float = 0.0

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'WineSample':
        unknown = set(values) - set(WINE_COLUMNS)
        if unknown:
            raise KeyError(f"Unknown wine fields: {sorted(unknown)}")
        return cls(**{name: float(value) for name, value in values.items()})

    def to_frame(self) -> pd.DataFrame:
        """Return the sample as a one-row DataFrame in schema column order."""
        return pd.DataFrame([asdict(self)], columns=WINE_COLUMNS)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file, merged over DEFAULT_CONFIG.

    Args:
        config_path: Path to the configuration file, or None for defaults only

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    logger.info(f"Loaded configuration from {config_path}")
    return _merge(DEFAULT_CONFIG, loaded)


def resolve_data_path(file_name: str, data_dir: str = 'Data') -> Path:
    """Resolve a data file name against the data directory of the working directory."""
    return Path.cwd() / data_dir / file_name


def load_data(
    file_path: Union[str, Path],
    separator: str = ';',
    has_header: bool = True
) -> pd.DataFrame:
    """
    Load a wine-quality CSV file into the fixed 12-column schema.

    Columns are bound to the schema by position; a header row, when present,
    is skipped whatever its spelling.

    Args:
        file_path: Path to the CSV file
        separator: Column separator
        has_header: Whether the first line is a header row

    Returns:
        DataFrame with the schema columns, all float64

    Raises:
        FileNotFoundError: If data file doesn't exist
        ParseError: If a row has the wrong arity or a non-numeric value
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {file_path}")

    # Read every line, header included, as text so that the column count is
    # taken from the first line and longer rows fail instead of shifting into an index.
    try:
        raw = pd.read_csv(
            file_path,
            sep=separator,
            header=None,
            dtype=str,
            skipinitialspace=True,
            keep_default_na=False,
        )
    except pd.errors.ParserError as e:
        raise ParseError(f"Malformed row in {file_path}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"No columns to parse in {file_path}") from e

    if raw.shape[1] != len(WINE_COLUMNS):
        raise ParseError(
            f"Expected {len(WINE_COLUMNS)} columns in {file_path}, but found {raw.shape[1]}"
        )

    if has_header:
        raw = raw.iloc[1:]
    raw.columns = WINE_COLUMNS

    df = pd.DataFrame(index=raw.index)
    for col in WINE_COLUMNS:
        text = raw[col].str.strip()
        values = pd.to_numeric(text, errors='coerce')
        bad = values.isna()
        if bad.any():
            line = int(bad.idxmax()) + 1
            value = text[bad].iloc[0]
            if pd.isna(value) or value == '':
                raise ParseError(
                    f"{file_path}, line {line}: missing value for '{col}' "
                    f"(expected {len(WINE_COLUMNS)} columns)"
                )
            raise ParseError(
                f"{file_path}, line {line}: non-numeric value {value!r} for '{col}'"
            )
        df[col] = values.astype('float64')

    logger.info(f"Loaded data from {file_path}: {df.shape[0]} rows × {df.shape[1]} columns")
    return df.reset_index(drop=True)


def print_data_summary(df: pd.DataFrame, title: str = "DATASET SUMMARY") -> None:
    """
    Print a formatted summary of the dataset to console.

    Args:
        df: DataFrame to summarize
        title: Heading of the summary block
    """
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)
    print(f"Shape: {df.shape[0]} rows × {df.shape[1]} columns")
    print(f"Quality range: {df[TARGET_COLUMN].min():g} - {df[TARGET_COLUMN].max():g}")
    print("\nBasic Statistics:")
    print("-" * 40)
    print(df.describe().round(4).to_string())
    print("=" * 60 + "\n")
