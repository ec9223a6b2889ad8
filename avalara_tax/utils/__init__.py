"""Avalara tax client - Utilities Package"""

from avalara_tax.utils.decorators import (
    audit_log,
    measure_performance,
    performance_context
)
from avalara_tax.utils.logging_config import setup_logging

__all__ = [
    'audit_log',
    'measure_performance',
    'performance_context',
    'setup_logging',
]
