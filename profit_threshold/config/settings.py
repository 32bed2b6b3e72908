# profit_threshold/config/settings.py
"""
Unified Configuration Management
Uses Pydantic for validation and type safety
"""

from typing import Optional
from pathlib import Path
from enum import Enum

from pydantic import Field, ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RateTableConfig(BaseSettings):
    """Rate table ingestion configuration"""
    tolerance: float = Field(default=1e-6, gt=0.0, le=1e-2, description="Tolerance for tpr+fnr and fpr+tnr sums")
    grid_size: int = Field(default=401, ge=2, le=100_000, description="Threshold grid size when deriving rates from scores")

    class Config:
        env_prefix = "RATES_"


class CostConfig(BaseSettings):
    """Default uniform cost/benefit pair"""
    cb_tp: float = Field(default=50.0, description="Net value of a true positive (revenue minus contact cost)")
    cb_fp: float = Field(default=-30.0, description="Net value of a false positive (minus contact cost)")

    class Config:
        env_prefix = "COSTS_"


class OptimizationConfig(BaseSettings):
    """Portfolio aggregation configuration"""
    max_workers: int = Field(default=1, ge=1, le=64, description="Workers used to compute customer curves")
    executor_type: str = Field(default="thread", pattern="^(thread|process)$", description="thread or process pool")
    batch_size: int = Field(default=500, ge=1, description="Customers per submitted batch")

    class Config:
        env_prefix = "OPTIMIZATION_"


class MonitoringConfig(BaseSettings):
    """Logging configuration"""
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    class Config:
        env_prefix = "MONITORING_"


class ProfitSettings(BaseSettings):
    """Main application settings"""
    project_name: str = Field(default="profit_threshold", description="Project name")
    version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Deployment environment")

    # Sub-configurations
    rate_table: RateTableConfig = Field(default_factory=RateTableConfig)
    costs: CostConfig = Field(default_factory=CostConfig)
    optimization: OptimizationConfig = Field(default_factory=OptimizationConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    class Config:
        env_prefix = "PROFIT_"
        case_sensitive = False

    def get_config_file_path(self) -> Path:
        """Get configuration file path based on environment"""
        config_dir = Path("config")
        env_config = config_dir / f"settings.{self.environment.value}.yaml"
        if env_config.exists():
            return env_config
        return config_dir / "settings.yaml"


# Global settings instance
settings = ProfitSettings()


def get_settings() -> ProfitSettings:
    """Return the active settings (reflects the last load_settings call)"""
    return settings


def load_settings(config_file: Optional[Path] = None) -> ProfitSettings:
    """
    Load settings from file or environment variables

    Args:
        config_file: Optional path to YAML config file

    Returns:
        ProfitSettings: Loaded and validated settings
    """
    global settings
    from ..utils.exceptions import ConfigurationError

    if config_file and Path(config_file).exists():
        import yaml
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
            settings = ProfitSettings(**config_data)
        except (yaml.YAMLError, PydanticValidationError, TypeError) as e:
            raise ConfigurationError(
                f"Could not load config from {config_file}",
                details={"error": str(e)}
            ) from e
    else:
        # Load from environment variables only
        settings = ProfitSettings()

    return settings


def save_settings(config_file: Optional[Path] = None) -> Path:
    """
    Save current settings to YAML file

    Args:
        config_file: Optional path to save config file

    Returns:
        Path the settings were written to
    """
    import yaml

    config_file = Path(config_file) if config_file else settings.get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    config_data = settings.model_dump(mode="json")
    with open(config_file, 'w', encoding='utf-8') as f:
        yaml.dump(config_data, f, default_flow_style=False, sort_keys=False)

    return config_file


__all__ = [
    "Environment",
    "LogLevel",
    "RateTableConfig",
    "CostConfig",
    "OptimizationConfig",
    "MonitoringConfig",
    "ProfitSettings",
    "settings",
    "get_settings",
    "load_settings",
    "save_settings",
]
