"""
Test Suite for Prediction Module
=================================
"""

import pytest

from wineml.data_loader import FEATURE_COLUMNS, WineSample
from wineml.model import build_model
from wineml.prediction import DEFAULT_SAMPLE, predict_one, sample_from_config


@pytest.fixture(scope="module")
def model(train_df):
    return build_model(train_df)


class TestPredictOne:
    """Tests for predict_one."""

    def test_returns_float(self, model):
        assert isinstance(predict_one(model, DEFAULT_SAMPLE), float)

    def test_training_row_is_close_to_its_label(self, model, train_df):
        # Row in the middle of a quality step, away from the rounding boundary
        row = train_df.iloc[(train_df['alcohol'] - 11.0).abs().idxmin()]
        sample = WineSample.from_dict(row.to_dict())

        assert predict_one(model, sample) == pytest.approx(row['quality'], abs=0.5)

    def test_quality_is_ignored(self, model, train_df):
        row = train_df.iloc[0].to_dict()
        low = WineSample.from_dict({**row, 'quality': 0})
        high = WineSample.from_dict({**row, 'quality': 9})

        assert predict_one(model, low) == predict_one(model, high)

    def test_selected_wine_in_plausible_range(self, model):
        assert 3.0 <= predict_one(model, DEFAULT_SAMPLE) <= 9.0

    def test_single_feature_model(self, train_df):
        model = build_model(train_df, ['alcohol'])

        assert 3.0 <= predict_one(model, DEFAULT_SAMPLE) <= 9.0


class TestSampleFromConfig:

    def test_default_when_unset(self):
        assert sample_from_config({'prediction': {'sample': None}}) == DEFAULT_SAMPLE
        assert sample_from_config(None) == DEFAULT_SAMPLE

    def test_configured_sample(self):
        values = {name: 1.5 for name in FEATURE_COLUMNS}

        sample = sample_from_config({'prediction': {'sample': values}})

        assert sample.alcohol == 1.5
        assert sample.quality == 0.0


def test_default_sample_values():
    assert DEFAULT_SAMPLE.fixed_acidity == 7.6
    assert DEFAULT_SAMPLE.density == 0.99422
    assert DEFAULT_SAMPLE.alcohol == 9.5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
