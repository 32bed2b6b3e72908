# profit_threshold/utils/exceptions.py
"""
Custom exception hierarchy for the expected-value threshold optimizer
"""

from typing import Dict, Any, Optional, Iterable


class ProfitThresholdError(Exception):
    """Base exception for the threshold optimizer"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(ProfitThresholdError):
    """Configuration-related errors"""
    pass


class ValidationError(ProfitThresholdError):
    """Input validation errors"""
    pass


class MalformedRateTableError(ValidationError):
    """Rate table violates its structural invariants"""
    pass


class InvalidProbabilityError(ValidationError):
    """Customer probability outside [0, 1]"""

    def __init__(self, message: str, customer_id: Any = None, p1: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.customer_id = customer_id
        self.p1 = p1


class InvalidCostBenefitError(ValidationError):
    """Cost/benefit coefficient is not a finite real"""
    pass


class DuplicateCustomerError(ValidationError):
    """Population contains repeated customer identifiers"""

    def __init__(self, message: str, duplicate_ids: Iterable[Any] = (), details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.duplicate_ids = list(duplicate_ids)


class EmptyPopulationError(ValidationError):
    """Aggregation requested over no customers"""
    pass


class LookupFailedError(ProfitThresholdError):
    """Query against absent data"""
    pass


class ThresholdNotFoundError(LookupFailedError):
    """Threshold is not part of the fixed grid"""

    def __init__(self, message: str, threshold: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.threshold = threshold


class EmptyCurveError(LookupFailedError):
    """Curve has no points"""
    pass


def create_error_context(operation: str, **kwargs) -> Dict[str, Any]:
    """
    Create error context dictionary

    Args:
        operation: Operation that failed
        **kwargs: Additional context

    Returns:
        Error context dictionary
    """
    context = {"operation": operation}
    context.update(kwargs)
    return context


__all__ = [
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
]
