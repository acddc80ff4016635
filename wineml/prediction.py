"""
Prediction Module
=================

Single-sample quality prediction.
"""

import logging
from typing import Dict, Any, Optional

from .data_loader import WineSample
from .model import WineQualityModel

logger = logging.getLogger(__name__)

# A white wine from the training data; its recorded quality is 6
DEFAULT_SAMPLE = WineSample(
    fixed_acidity=7.6,
    volatile_acidity=0.17,
    citric_acid=0.27,
    residual_sugar=4.6,
    chlorides=0.05,
    free_sulfur_dioxide=23,
    total_sulfur_dioxide=98,
    density=0.99422,
    ph=3.08,
    sulphates=0.47,
    alcohol=9.5,
    quality=0,
)


def sample_from_config(config: Optional[Dict[str, Any]] = None) -> WineSample:
    """Return the configured prediction sample, or DEFAULT_SAMPLE when none is set."""
    values = (config or {}).get('prediction', {}).get('sample')
    if not values:
        return DEFAULT_SAMPLE
    return WineSample.from_dict(values)


def predict_one(model: WineQualityModel, sample: WineSample) -> float:
    """
    Predict the quality of one wine.

    The sample's own `quality` value is ignored.

    Args:
        model: Fitted WineQualityModel
        sample: Wine to score

    Returns:
        Predicted quality
    """
    prediction = float(model.predict(sample.to_frame())[0])
    logger.info(f"Predicted quality {prediction:.4f} for {sample}")
    return prediction
