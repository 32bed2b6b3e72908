"""
Reporting Module - business case of a threshold decision
"""

from .business_case import (
    summarize_decision,
    print_business_case
)

__all__ = [
    'summarize_decision',
    'print_business_case'
]
