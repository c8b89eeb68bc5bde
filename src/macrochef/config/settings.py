"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".macrochef"


@dataclass
class OptimizationConfig:
    """Strategy selection and deterministic solver configuration."""

    default_strategy: str = "continuous"  # "continuous" | "quantized" | "stochastic" | "baseline"
    portion_size: float = 50.0
    fallback_to_continuous: bool = False
    seed: Optional[int] = None


@dataclass
class StochasticSettings:
    """Stochastic search configuration."""

    generations: int = 50
    population_size: int = 20
    mutation_rate: float = 0.2


@dataclass
class CatalogConfig:
    """Ingredient catalog configuration."""

    path: Optional[Path] = None  # None uses the built-in catalog


@dataclass
class DetectionConfig:
    """Image-detection merge configuration."""

    confidence_threshold: float = 0.6


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class Settings:
    """Main application settings."""

    optimization: OptimizationConfig = field(default_factory=OptimizationConfig)
    stochastic: StochasticSettings = field(default_factory=StochasticSettings)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.macrochef/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse optimization config
        if "optimization" in data:
            opt_data = data["optimization"]
            if "default_strategy" in opt_data:
                settings.optimization.default_strategy = str(opt_data["default_strategy"])
            if "portion_size" in opt_data:
                settings.optimization.portion_size = float(opt_data["portion_size"])
            if "fallback_to_continuous" in opt_data:
                settings.optimization.fallback_to_continuous = bool(
                    opt_data["fallback_to_continuous"]
                )
            if opt_data.get("seed") is not None:
                settings.optimization.seed = int(opt_data["seed"])

        # Parse stochastic config
        if "stochastic" in data:
            ga_data = data["stochastic"]
            if "generations" in ga_data:
                settings.stochastic.generations = int(ga_data["generations"])
            if "population_size" in ga_data:
                settings.stochastic.population_size = int(ga_data["population_size"])
            if "mutation_rate" in ga_data:
                settings.stochastic.mutation_rate = float(ga_data["mutation_rate"])

        # Parse catalog config
        if "catalog" in data:
            cat_data = data["catalog"]
            if cat_data.get("path"):
                settings.catalog.path = Path(cat_data["path"]).expanduser()

        # Parse detection config
        if "detection" in data:
            det_data = data["detection"]
            if "confidence_threshold" in det_data:
                settings.detection.confidence_threshold = float(
                    det_data["confidence_threshold"]
                )

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"]
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.macrochef/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Settings as the nested dict written to config.yaml."""
        return {
            "optimization": {
                "default_strategy": self.optimization.default_strategy,
                "portion_size": self.optimization.portion_size,
                "fallback_to_continuous": self.optimization.fallback_to_continuous,
                "seed": self.optimization.seed,
            },
            "stochastic": {
                "generations": self.stochastic.generations,
                "population_size": self.stochastic.population_size,
                "mutation_rate": self.stochastic.mutation_rate,
            },
            "catalog": {
                "path": str(self.catalog.path) if self.catalog.path else None,
            },
            "detection": {
                "confidence_threshold": self.detection.confidence_threshold,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
        }


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
