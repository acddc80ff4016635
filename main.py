#!/usr/bin/env python3
"""
Wine Tasting - Main Pipeline
============================

Trains a gradient-boosted regression tree on white wine data and runs three
scenarios, each with a freshly trained model:

    1. Train and validate with all features (R², RMSE)
    2. Predict the quality of one selected wine
    3. Find the single feature that best predicts quality

Data is read from Data/winequality-white-train.csv and
Data/winequality-white-validate.csv under the working directory. Settings are
read from config/config.yaml when that file exists.

Usage:
    python main.py
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import matplotlib.pyplot as plt
import pandas as pd

from wineml.ablation import plot_feature_scores, rank_features, select_best_fit
from wineml.data_loader import (
    FEATURE_COLUMNS,
    WineSample,
    load_config,
    load_data,
    print_data_summary,
    resolve_data_path,
)
from wineml.evaluation import (
    evaluate_with_predictions,
    format_score,
    plot_actual_vs_predicted,
    print_evaluation_report,
)
from wineml.model import build_model
from wineml.prediction import predict_one, sample_from_config

CONFIG_PATH = Path("config") / "config.yaml"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure logging for the pipeline."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def _figures_dir(config: Dict[str, Any]) -> Optional[Path]:
    figures_path = config.get('output', {}).get('figures_path')
    if not figures_path:
        return None
    figures_dir = Path(figures_path)
    figures_dir.mkdir(parents=True, exist_ok=True)
    return figures_dir


def load_datasets(config: Dict[str, Any]) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Load the training and validation files named in the config.

    Returns:
        Tuple of (training_data, validation_data)
    """
    data_config = config.get('data', {})
    data_dir = data_config.get('data_dir', 'Data')
    separator = data_config.get('separator', ';')
    has_header = data_config.get('has_header', True)

    print("Load training data...", end="", flush=True)
    training_data = load_data(
        resolve_data_path(data_config.get('train_file', 'winequality-white-train.csv'), data_dir),
        separator=separator,
        has_header=has_header
    )
    print("DONE!")

    print("Load validation data...", end="", flush=True)
    validation_data = load_data(
        resolve_data_path(data_config.get('validate_file', 'winequality-white-validate.csv'), data_dir),
        separator=separator,
        has_header=has_header
    )
    print("DONE!")

    return training_data, validation_data


def run_train_and_validate(
    training_data: pd.DataFrame,
    validation_data: pd.DataFrame,
    config: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Scenario 1: train on all features and report validation metrics.

    Returns:
        Dictionary with the metrics
    """
    print("Train model...", end="", flush=True)
    model = build_model(training_data, FEATURE_COLUMNS, config)
    print("DONE!")

    print("Validate model...", end="", flush=True)
    metrics, predictions = evaluate_with_predictions(model, validation_data)
    print("DONE!")

    print_evaluation_report(metrics)

    figures_dir = _figures_dir(config)
    if figures_dir is not None:
        plot_actual_vs_predicted(
            validation_data['quality'].to_numpy(),
            predictions,
            save_path=str(figures_dir / "actual_vs_predicted.png")
        )
        plt.close('all')

    return {'metrics': metrics}


def run_predict(
    training_data: pd.DataFrame,
    sample: WineSample,
    config: Dict[str, Any]
) -> float:
    """
    Scenario 2: train on all features and predict one wine.

    Returns:
        Predicted quality
    """
    print("Train model...", end="", flush=True)
    model = build_model(training_data, FEATURE_COLUMNS, config)
    print("DONE!")

    print("Predicting quality...", end="", flush=True)
    prediction = predict_one(model, sample)
    print(format_score(prediction))

    return prediction


def run_find_best_fit(
    training_data: pd.DataFrame,
    validation_data: pd.DataFrame,
    config: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Scenario 3: rank features by single-feature R² and report the best.

    Returns:
        Dictionary with the per-feature scores and the winner
    """
    scores = rank_features(training_data, validation_data, FEATURE_COLUMNS, config)
    best_feature, best_score = select_best_fit(scores)

    print(
        f"Best fit for finding a good wine: {best_feature} "
        f"with a RSquared of {format_score(best_score)}"
    )

    figures_dir = _figures_dir(config)
    if figures_dir is not None:
        plot_feature_scores(scores, save_path=str(figures_dir / "feature_scores.png"))
        plt.close('all')

    return {'scores': scores, 'best_feature': best_feature, 'best_score': best_score}


def run_demo(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Execute the three scenarios in order.

    Args:
        config: Configuration dictionary

    Returns:
        Dictionary containing all scenario results
    """
    print("-----Tasting wine with Python------")
    print("")

    training_data, validation_data = load_datasets(config)

    if config.get('driver', {}).get('show_data_summary', False):
        print_data_summary(training_data, "TRAINING DATA SUMMARY")
        print_data_summary(validation_data, "VALIDATION DATA SUMMARY")

    results = {}

    print("\n")
    print("**** TRAIN AND EVALUATE MODEL WITH ALL FEATURES *****")
    results['validation'] = run_train_and_validate(training_data, validation_data, config)

    print("\n")
    print("**** PREDICT QUALITY OF THE SELECTED WINE *****")
    results['prediction'] = run_predict(training_data, sample_from_config(config), config)

    print("\n")
    print("**** FIND THE BEST FIT TO FIND A GOOD WINE  *****")
    results['best_fit'] = run_find_best_fit(training_data, validation_data, config)

    return results


def wait_for_exit() -> None:
    """Block until Enter is pressed; end of input also releases the wait."""
    try:
        input("Press Enter / Return to exit...")
    except EOFError:
        print()


def main() -> int:
    """Main entry point."""
    config_path = str(CONFIG_PATH) if CONFIG_PATH.exists() else None

    try:
        config = load_config(config_path)
        log_config = config.get('logging', {})
        setup_logging(log_config.get('level', 'WARNING'), log_config.get('file'))

        run_demo(config)

    except Exception as e:
        logging.error(f"Run failed: {e}", exc_info=True)
        print(f"\n❌ Run failed: {e}")
        return 1

    if config.get('driver', {}).get('wait_for_exit', True):
        wait_for_exit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
