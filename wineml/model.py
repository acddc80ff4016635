"""
Model Training Module
=====================

Builds the wine-quality regression model: a scikit-learn Pipeline that
concatenates the selected feature columns into one feature matrix and fits a
HistGradientBoostingRegressor on the quality label.

Features:
    - Any ordered subset of the eleven wine features
    - Library-default hyperparameters with a fixed random seed
    - Optional hyperparameter overrides via the config file
    - Training progress logging
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import HistGradientBoostingRegressor
from sklearn.pipeline import Pipeline

from .data_loader import FEATURE_COLUMNS, TARGET_COLUMN

logger = logging.getLogger(__name__)

LABEL_COLUMN = 'label'


class TrainingError(ValueError):
    """Raised when the training table cannot be used to fit a model."""


class UnknownFeatureError(KeyError):
    """Raised when a feature selection names a column outside the wine schema."""


def validate_features(features: Sequence[str]) -> list:
    """
    Check a feature selection against the wine schema.

    Args:
        features: Ordered feature names

    Returns:
        The selection as a list, order preserved

    Raises:
        TrainingError: If the selection is empty
        UnknownFeatureError: If a name is not one of the wine features
    """
    if isinstance(features, str):
        features = [features]
    features = list(features)

    if not features:
        raise TrainingError("At least one feature must be selected.")

    unknown = [f for f in features if f not in FEATURE_COLUMNS]
    if unknown:
        raise UnknownFeatureError(
            f"Unknown feature(s) {unknown}. Valid features: {FEATURE_COLUMNS}"
        )
    return features


class WineQualityModel:
    """
    Wine quality regressor built on HistGradientBoostingRegressor.

    The pipeline copies `quality` to the label, concatenates the selected
    features in order, and fits the gradient-boosted trees on them.
    """

    def __init__(
        self,
        features: Sequence[str] = FEATURE_COLUMNS,
        random_state: int = 42,
        hyperparameters: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the model.

        Args:
            features: Feature columns concatenated into the model input, in order
            random_state: Random seed for reproducibility
            hyperparameters: Overrides for HistGradientBoostingRegressor;
                anything not given keeps the library default
        """
        self.features = validate_features(features)
        self.random_state = random_state
        self.hyperparameters = dict(hyperparameters or {})

        self.pipeline: Optional[Pipeline] = None
        self.training_info: Dict[str, Any] = {}
        self._is_fitted = False

    def _create_pipeline(self) -> Pipeline:
        """Create the unfitted concat + regressor pipeline."""
        params = {'random_state': self.random_state}
        params.update(self.hyperparameters)

        concat = ColumnTransformer(
            [('features', 'passthrough', self.features)],
            remainder='drop'
        )
        return Pipeline([
            ('concat', concat),
            ('regressor', HistGradientBoostingRegressor(**params)),
        ])

    @staticmethod
    def _label(df: pd.DataFrame) -> pd.Series:
        return df[TARGET_COLUMN].rename(LABEL_COLUMN)

    def fit(self, training_set: pd.DataFrame) -> 'WineQualityModel':
        """
        Train the model on a wine dataset.

        Args:
            training_set: DataFrame with the selected features and `quality`

        Returns:
            Self for method chaining
        """
        if training_set is None or len(training_set) == 0:
            raise TrainingError("Training set is empty.")

        missing = [c for c in self.features + [TARGET_COLUMN] if c not in training_set.columns]
        if missing:
            raise TrainingError(f"Training set is missing columns: {missing}")

        label = self._label(training_set)
        if label.isna().any():
            raise TrainingError("Training labels contain missing values.")

        start_time = datetime.now()
        logger.info(f"Training on {len(training_set)} rows with features {self.features}")

        self.pipeline = self._create_pipeline()
        self.pipeline.fit(training_set, label)

        duration = (datetime.now() - start_time).total_seconds()
        regressor = self.pipeline.named_steps['regressor']
        self.training_info = {
            'training_duration_seconds': duration,
            'n_samples': int(len(training_set)),
            'n_features': len(self.features),
            'n_iterations': int(regressor.n_iter_),
        }
        self._is_fitted = True

        logger.info(
            f"Training complete in {duration:.2f}s ({regressor.n_iter_} boosting iterations)"
        )
        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """
        Predict quality for every row of a wine dataset.

        The `quality` column, if present, is ignored.

        Args:
            df: DataFrame containing at least the selected features

        Returns:
            Predictions array of shape (n_samples,)
        """
        if not self._is_fitted:
            raise ValueError("Model must be trained before prediction. Call fit() first.")

        missing = [c for c in self.features if c not in df.columns]
        if missing:
            raise UnknownFeatureError(f"Input is missing feature columns: {missing}")

        return self.pipeline.predict(df)


def build_model(
    training_set: pd.DataFrame,
    features: Sequence[str] = FEATURE_COLUMNS,
    config: Optional[Dict[str, Any]] = None
) -> WineQualityModel:
    """
    Build and fit a fresh model on the given features.

    Args:
        training_set: Training DataFrame
        features: Ordered feature selection
        config: Configuration dictionary (uses the `model` section)

    Returns:
        Fitted WineQualityModel
    """
    model_config = (config or {}).get('model', {})

    model = WineQualityModel(
        features=features,
        random_state=model_config.get('random_state', 42),
        hyperparameters=model_config.get('hyperparameters') or {}
    )
    return model.fit(training_set)
