"""
Feature Ablation Module
=======================

Trains one model per feature and ranks the features by the R² each one
reaches on its own against the validation set.
"""

import logging
import math
from typing import Dict, Any, Mapping, Optional, Sequence, Tuple

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from .data_loader import FEATURE_COLUMNS
from .evaluation import evaluate, format_score
from .model import build_model, validate_features

logger = logging.getLogger(__name__)


def rank_features(
    training_set: pd.DataFrame,
    validation_set: pd.DataFrame,
    features: Sequence[str] = FEATURE_COLUMNS,
    config: Optional[Dict[str, Any]] = None,
    verbose: bool = True
) -> Dict[str, float]:
    """
    Compute the single-feature R² of every feature.

    Args:
        training_set: Training DataFrame
        validation_set: Validation DataFrame
        features: Features to evaluate, in order
        config: Configuration dictionary passed to build_model
        verbose: Print one progress line per feature

    Returns:
        Mapping feature -> R², in evaluation order
    """
    features = validate_features(features)
    scores: Dict[str, float] = {}

    for feature in features:
        if verbose:
            print(f"Calculate RSquared for {feature}... ", end="", flush=True)

        model = build_model(training_set, [feature], config)
        metrics = evaluate(model, validation_set)
        scores[feature] = metrics.r_squared

        if verbose:
            print(format_score(metrics.r_squared))

    return scores


def select_best_fit(scores: Mapping[str, float]) -> Tuple[str, float]:
    """
    Pick the feature with the highest R².

    Ties go to the feature seen first. NaN scores never win.

    Raises:
        ValueError: If no feature has a finite score
    """
    best: Optional[Tuple[str, float]] = None
    for feature, score in scores.items():
        if score is None or math.isnan(score):
            continue
        if best is None or score > best[1]:
            best = (feature, score)

    if best is None:
        raise ValueError(f"No feature has a defined R² score: {dict(scores)}")

    logger.info(f"Best single feature: {best[0]} (R²={best[1]:.4f})")
    return best


def plot_feature_scores(
    scores: Mapping[str, float],
    figsize: Tuple[int, int] = (10, 5),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Bar chart of single-feature R² scores, best first.

    Args:
        scores: Mapping feature -> R²
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    frame = pd.DataFrame({'feature': list(scores), 'r_squared': list(scores.values())})
    frame = frame.sort_values('r_squared', ascending=False, kind='stable')

    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(data=frame, x='feature', y='r_squared', ax=ax, color='steelblue')

    ax.axhline(0, color='gray', linestyle=':', alpha=0.5)
    ax.set_xlabel('Feature')
    ax.set_ylabel('R² Score')
    ax.set_title('Single-feature R² on validation data', fontweight='bold')
    ax.tick_params(axis='x', rotation=45)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Feature score plot saved to {save_path}")

    return fig
