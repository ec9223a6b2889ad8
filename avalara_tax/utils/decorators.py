"""
Decorators for audit logging and performance monitoring.
"""
import functools
import logging
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Callable

from avalara_tax.core.models import TaxTransaction

# Configure audit logger separately from main app logger
audit_logger = logging.getLogger('avalara.audit')
perf_logger = logging.getLogger('avalara.performance')


def _transaction_label(args, kwargs) -> str:
    """Best identifier for the transaction a call is about"""
    candidates = list(args) + list(kwargs.values())
    for value in candidates:
        if isinstance(value, TaxTransaction):
            return value.reference_code or value.purchase_order_number or "N/A"
        if isinstance(value, dict) and 'cart_lines' in value:
            return value.get('reference_code') or value.get('purchase_order_number') or "N/A"
    return "N/A"


def audit_log(func: Callable) -> Callable:
    """
    Decorator that logs entry, result code and failure of a tax call.
    Keeps a trail of every committed or quoted transaction.

    Usage:
        @audit_log
        def get_tax(self, transaction):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_name = func.__qualname__
        label = _transaction_label(args, kwargs)

        audit_logger.info(
            f"CALL | {func_name} | Transaction: {label} | "
            f"Timestamp: {datetime.now().isoformat()}"
        )

        try:
            result = func(*args, **kwargs)

            status = getattr(result, 'result_code', None) or "PROCESSED"
            audit_logger.info(
                f"SUCCESS | {func_name} | Transaction: {label} | "
                f"Status: {status}"
            )

            return result

        except Exception as e:
            audit_logger.error(
                f"FAILURE | {func_name} | Transaction: {label} | "
                f"Error: {str(e)}"
            )
            raise

    return wrapper


def measure_performance(func: Callable) -> Callable:
    """
    Decorator to measure and log function execution time.

    Usage:
        @measure_performance
        def send(body, content_type):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            perf_logger.debug(
                f"{func.__qualname__} completed in {elapsed_ms:.2f}ms"
            )

            return result

        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            perf_logger.warning(
                f"{func.__qualname__} failed after {elapsed_ms:.2f}ms: {str(e)}"
            )
            raise

    return wrapper


@contextmanager
def performance_context(operation_name: str):
    """
    Context manager for measuring code block performance.

    Usage:
        with performance_context("GetTax round trip"):
            http.post(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - start) * 1000
        perf_logger.debug(f"{operation_name}: {elapsed:.2f}ms")
