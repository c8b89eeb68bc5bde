"""Tests for YAML-backed settings."""

from __future__ import annotations

from pathlib import Path

from macrochef.config.settings import Settings


class TestSettings:
    """Tests for Settings.load() and Settings.save()."""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "config.yaml")

        assert settings.optimization.default_strategy == "continuous"
        assert settings.optimization.portion_size == 50.0
        assert settings.optimization.fallback_to_continuous is False
        assert settings.stochastic.generations == 50
        assert settings.stochastic.population_size == 20
        assert settings.detection.confidence_threshold == 0.6
        assert settings.catalog.path is None

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "optimization:\n"
            "  default_strategy: genetic\n"
            "  seed: 7\n"
            "stochastic:\n"
            "  generations: 100\n"
            "catalog:\n"
            "  path: ~/my-catalog.yaml\n"
        )

        settings = Settings.load(path)

        assert settings.optimization.default_strategy == "genetic"
        assert settings.optimization.seed == 7
        assert settings.stochastic.generations == 100
        assert settings.stochastic.population_size == 20
        assert settings.catalog.path == Path("~/my-catalog.yaml").expanduser()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path).defaults.output_format == "table"

    def test_save_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.optimization.portion_size = 25.0
        settings.optimization.fallback_to_continuous = True
        settings.stochastic.mutation_rate = 0.3
        settings.detection.confidence_threshold = 0.75

        settings.save(path)
        restored = Settings.load(path)

        assert restored.optimization.portion_size == 25.0
        assert restored.optimization.fallback_to_continuous is True
        assert restored.stochastic.mutation_rate == 0.3
        assert restored.detection.confidence_threshold == 0.75
        assert restored.optimization.seed is None
