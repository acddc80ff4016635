"""
Smoke tests for the main pipeline script.
"""

import pytest

import main
from wineml.data_loader import load_config


@pytest.fixture
def config():
    config = load_config(None)
    config['driver']['wait_for_exit'] = False
    return config


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)


class TestRunDemo:
    """Tests for the three scenarios run end to end."""

    def test_runs_all_scenarios(self, data_dir, config, monkeypatch, capsys):
        monkeypatch.chdir(data_dir)

        results = main.run_demo(config)

        out = capsys.readouterr().out
        assert "Load training data...DONE!" in out
        assert "Load validation data...DONE!" in out
        assert "RSquared Score: " in out
        assert "Root Mean Squared Error: " in out
        assert "Predicting quality..." in out
        assert out.count("Calculate RSquared for ") == 11
        assert "Best fit for finding a good wine: alcohol with a RSquared of " in out

        assert results['validation']['metrics'].r_squared > 0.8
        assert 3.0 <= results['prediction'] <= 9.0
        assert results['best_fit']['best_feature'] == 'alcohol'
        assert results['best_fit']['best_score'] == max(results['best_fit']['scores'].values())

    def test_saves_figures_when_configured(self, data_dir, config, monkeypatch):
        monkeypatch.chdir(data_dir)
        config['output']['figures_path'] = 'reports/figures'

        main.run_demo(config)

        assert (data_dir / "reports" / "figures" / "actual_vs_predicted.png").exists()
        assert (data_dir / "reports" / "figures" / "feature_scores.png").exists()

    def test_data_summary(self, data_dir, config, monkeypatch, capsys):
        monkeypatch.chdir(data_dir)
        config['driver']['show_data_summary'] = True

        main.run_demo(config)

        out = capsys.readouterr().out
        assert "TRAINING DATA SUMMARY" in out
        assert "VALIDATION DATA SUMMARY" in out

    def test_missing_data_propagates(self, tmp_path, config, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError):
            main.run_demo(config)

        assert "Load training data..." in capsys.readouterr().out


class TestMain:
    """Tests for the process entry point."""

    def test_returns_error_code_without_data(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert main.main() == 1
        assert "Run failed: Data file not found" in capsys.readouterr().out

    def test_success_with_config_file(self, data_dir, monkeypatch, capsys):
        (data_dir / "config").mkdir()
        (data_dir / "config" / "config.yaml").write_text("driver:\n  wait_for_exit: false\n")
        monkeypatch.chdir(data_dir)

        assert main.main() == 0
        assert "Best fit for finding a good wine" in capsys.readouterr().out

    def test_waits_for_enter(self, data_dir, monkeypatch):
        monkeypatch.chdir(data_dir)
        prompts = []
        monkeypatch.setattr("builtins.input", lambda prompt="": prompts.append(prompt) or "")

        assert main.main() == 0
        assert prompts == ["Press Enter / Return to exit..."]

    def test_end_of_input_releases_wait(self, monkeypatch):
        def closed_stdin(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_stdin)

        main.wait_for_exit()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
