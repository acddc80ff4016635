"""
Model Evaluation Module
=======================

Regression metrics for the wine quality model.

Features:
    - R² and RMSE against a held-out validation set
    - Explicit policy for a validation set with constant quality
    - Console formatting of scores
    - Actual vs Predicted plot
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import mean_squared_error, r2_score

from .data_loader import TARGET_COLUMN
from .model import WineQualityModel

logger = logging.getLogger(__name__)


@dataclass
class RegressionMetrics:
    """Metrics for one evaluation run against one validation set."""

    r_squared: float
    rmse: float
    n_samples: int

    def to_dict(self) -> dict:
        return {
            "r_squared": self.r_squared,
            "rmse": self.rmse,
            "n_samples": self.n_samples,
        }

    def __repr__(self) -> str:
        return (
            f"R²: {format_score(self.r_squared)}, RMSE: {format_score(self.rmse)} "
            f"(n={self.n_samples})"
        )


def format_score(value: float) -> str:
    """
    Format a score with at most two decimals, trailing zeros dropped.

    0.5 -> '0.5', 1.0 -> '1', 0.123 -> '0.12', NaN -> 'NaN'.
    """
    if value is None or math.isnan(value):
        return "NaN"
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return "0" if text == "-0" else text


def calculate_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> RegressionMetrics:
    """
    Calculate R² and RMSE for one set of predictions.

    When every actual value is identical R² is not defined; it is reported as
    1.0 if the predictions are exact and NaN otherwise.

    Args:
        y_true: Actual quality values
        y_pred: Predicted quality values

    Returns:
        RegressionMetrics
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()

    if len(y_true) == 0:
        raise ValueError("Cannot evaluate on an empty validation set.")
    if len(y_true) != len(y_pred):
        raise ValueError(
            f"Length mismatch: {len(y_true)} actual values, {len(y_pred)} predictions"
        )

    rmse = float(np.sqrt(mean_squared_error(y_true, y_pred)))

    if np.all(y_true == y_true[0]):
        if np.allclose(y_true, y_pred):
            r2 = 1.0
        else:
            r2 = float('nan')
        logger.warning(
            f"Validation labels have zero variance; R² reported as {format_score(r2)}"
        )
    else:
        r2 = float(r2_score(y_true, y_pred))

    return RegressionMetrics(r_squared=r2, rmse=rmse, n_samples=int(len(y_true)))


def evaluate(model: WineQualityModel, validation_set: pd.DataFrame) -> RegressionMetrics:
    """
    Apply a fitted model to a validation set and compute its metrics.

    Args:
        model: Fitted WineQualityModel
        validation_set: DataFrame with features and `quality`

    Returns:
        RegressionMetrics
    """
    metrics, _ = evaluate_with_predictions(model, validation_set)
    return metrics


def evaluate_with_predictions(
    model: WineQualityModel,
    validation_set: pd.DataFrame
) -> Tuple[RegressionMetrics, np.ndarray]:
    """Like evaluate, also returning the per-row predictions."""
    if len(validation_set) == 0:
        raise ValueError("Cannot evaluate on an empty validation set.")

    y_pred = model.predict(validation_set)
    metrics = calculate_metrics(validation_set[TARGET_COLUMN].to_numpy(), y_pred)

    logger.info(f"Evaluated features {model.features}: {metrics!r}")
    return metrics, y_pred


def plot_actual_vs_predicted(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    figsize: Tuple[int, int] = (8, 6),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Create an actual vs predicted scatter plot of wine quality.

    Args:
        y_true: Actual quality values
        y_pred: Predicted quality values
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    metrics = calculate_metrics(y_true, y_pred)

    fig, ax = plt.subplots(figsize=figsize)

    sns.scatterplot(x=y_true, y=y_pred, ax=ax, alpha=0.4, s=20)

    min_val = min(y_true.min(), y_pred.min())
    max_val = max(y_true.max(), y_pred.max())
    ax.plot([min_val, max_val], [min_val, max_val], 'r--', linewidth=2, label='Perfect')

    ax.set_xlabel('Actual quality')
    ax.set_ylabel('Predicted quality')
    ax.set_title(
        f'Actual vs Predicted\nR²={format_score(metrics.r_squared)}, '
        f'RMSE={format_score(metrics.rmse)}',
        fontsize=12, fontweight='bold'
    )
    ax.legend(loc='upper left', fontsize=8)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Actual vs Predicted plot saved to {save_path}")

    return fig


def print_evaluation_report(metrics: RegressionMetrics) -> None:
    """
    Print the R² and RMSE of an evaluation run.

    Args:
        metrics: Metrics from evaluate
    """
    print(f"RSquared Score: {format_score(metrics.r_squared)}")
    print(f"Root Mean Squared Error: {format_score(metrics.rmse)}")
