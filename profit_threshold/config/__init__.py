# Configuration module
# Handles unified configuration management with Pydantic

from .settings import (
    ProfitSettings,
    RateTableConfig,
    CostConfig,
    OptimizationConfig,
    MonitoringConfig,
    Environment,
    LogLevel,
    settings,
    get_settings,
    load_settings,
    save_settings,
)

__all__ = [
    # Main settings
    "ProfitSettings",
    "settings",
    "get_settings",
    "load_settings",
    "save_settings",

    # Sub-configurations
    "RateTableConfig",
    "CostConfig",
    "OptimizationConfig",
    "MonitoringConfig",
    "Environment",
    "LogLevel",
]
