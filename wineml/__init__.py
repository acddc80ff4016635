"""
WineML
======

Predicts white wine quality with gradient-boosted regression trees.

Modules:
    - data_loader: Configuration and CSV ingestion with schema validation
    - model: Pipeline training with HistGradientBoostingRegressor
    - evaluation: R² / RMSE metrics and plots
    - prediction: Single-sample inference
    - ablation: Single-feature ranking and best-fit selection
"""

__version__ = "1.0.0"
__author__ = "WineML Team"
