# Utils module
# Handles logging, exceptions, and helpers

from .logging import (
    setup_logging,
    get_logger,
    log_performance_metrics,
    log_error_with_context,
    logger
)
from .exceptions import (
    ProfitThresholdError,
    ConfigurationError,
    ValidationError,
    MalformedRateTableError,
    InvalidProbabilityError,
    InvalidCostBenefitError,
    DuplicateCustomerError,
    EmptyPopulationError,
    LookupFailedError,
    ThresholdNotFoundError,
    EmptyCurveError,
    create_error_context
)
from .helpers import (
    calculate_hash,
    safe_divide,
    create_batches,
    Timer
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "log_performance_metrics",
    "log_error_with_context",
    "logger",

    # Exceptions
    "ProfitThresholdError",
    "ConfigurationError",
    "ValidationError",
    "MalformedRateTableError",
    "InvalidProbabilityError",
    "InvalidCostBenefitError",
    "DuplicateCustomerError",
    "EmptyPopulationError",
    "LookupFailedError",
    "ThresholdNotFoundError",
    "EmptyCurveError",
    "create_error_context",

    # Helpers
    "calculate_hash",
    "safe_divide",
    "create_batches",
    "Timer"
]
