"""
Unit tests for logging decorators and setup.
"""
import logging

import pytest

from avalara_tax.core.models import TaxResult, TaxTransaction
from avalara_tax.utils import audit_log, measure_performance, performance_context, setup_logging


@audit_log
def quote(transaction):
    return TaxResult(result_code='Success')


@audit_log
def failing_quote(transaction):
    raise RuntimeError("boom")


class TestAuditLog:

    def test_labels_by_reference_code(self, caplog):
        with caplog.at_level(logging.INFO, logger='avalara.audit'):
            quote(TaxTransaction(reference_code='ORD-5'))

        assert 'CALL | quote | Transaction: ORD-5' in caplog.text
        assert 'Status: Success' in caplog.text

    def test_falls_back_to_purchase_order(self, caplog):
        with caplog.at_level(logging.INFO, logger='avalara.audit'):
            quote({'cart_lines': [], 'purchase_order_number': 'PO-1'})

        assert 'Transaction: PO-1' in caplog.text

    def test_failure_logged_and_reraised(self, caplog):
        with caplog.at_level(logging.INFO, logger='avalara.audit'):
            with pytest.raises(RuntimeError):
                failing_quote(TaxTransaction())

        assert 'FAILURE | failing_quote | Transaction: N/A | Error: boom' in caplog.text


class TestPerformance:

    def test_measure_performance_logs_timing(self, caplog):
        @measure_performance
        def work():
            return 42

        with caplog.at_level(logging.DEBUG, logger='avalara.performance'):
            assert work() == 42

        assert 'work completed in' in caplog.text

    def test_performance_context(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='avalara.performance'):
            with performance_context("block"):
                pass

        assert 'block:' in caplog.text


class TestSetupLogging:

    def test_levels_and_file_handler(self, monkeypatch, tmp_path):
        calls = []
        monkeypatch.setattr(logging, 'basicConfig', lambda **kw: calls.append(kw))

        setup_logging()
        setup_logging(verbose=True, log_file=str(tmp_path / 'avalara.log'))

        assert calls[0]['level'] == logging.INFO
        assert len(calls[0]['handlers']) == 1
        assert calls[1]['level'] == logging.DEBUG
        assert isinstance(calls[1]['handlers'][1], logging.FileHandler)
        calls[1]['handlers'][1].close()
