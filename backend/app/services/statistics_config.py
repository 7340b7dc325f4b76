"""
Statistics Configuration - Tunable windows and limits for the statistics engine.

Defaults reproduce the behaviour of the web client; a YAML file can override
any section without code changes.
"""
from dataclasses import dataclass, field
from typing import Optional

import yaml
from pathlib import Path


@dataclass
class PeriodConfig:
    """Period resolution configuration."""
    # Length of the "week" period and number of day buckets shown for it
    week_days: int = 7
    # Months looked back from the current month for a "quarter"
    quarter_lookback_months: int = 3


@dataclass
class GoalConfig:
    """Goal progress configuration."""
    # Window start when a goal has no creation timestamp
    default_window_days: int = 30


@dataclass
class DashboardConfig:
    """Dashboard recent-activity configuration."""
    recent_diet_limit: int = 3
    recent_exercise_limit: int = 2
    recent_activity_limit: int = 5


@dataclass
class StatisticsConfig:
    """Master configuration for statistics and progress calculations."""
    periods: PeriodConfig = field(default_factory=PeriodConfig)
    goals: GoalConfig = field(default_factory=GoalConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StatisticsConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = cls()

        if "periods" in data:
            config.periods = PeriodConfig(**data["periods"])
        if "goals" in data:
            config.goals = GoalConfig(**data["goals"])
        if "dashboard" in data:
            config.dashboard = DashboardConfig(**data["dashboard"])

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "periods": self.periods.__dict__,
            "goals": self.goals.__dict__,
            "dashboard": self.dashboard.__dict__,
        }


# Global default configuration instance
_default_config: Optional[StatisticsConfig] = None


def get_statistics_config() -> StatisticsConfig:
    """Get the current statistics configuration (singleton pattern)."""
    global _default_config
    if _default_config is None:
        _default_config = StatisticsConfig()
    return _default_config


def set_statistics_config(config: StatisticsConfig) -> None:
    """Set a custom statistics configuration."""
    global _default_config
    _default_config = config


def load_statistics_config_from_yaml(path: str | Path) -> StatisticsConfig:
    """Load and set statistics configuration from YAML file."""
    config = StatisticsConfig.from_yaml(path)
    set_statistics_config(config)
    return config
