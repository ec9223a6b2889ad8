"""
Avalara tax client.
Single entry point: build the request, send it, parse the reply, optionally cache it.
"""
import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from avalara_tax.core.builders import RequestBuilder
from avalara_tax.core.codecs import get_codec
from avalara_tax.core.config import ClientConfig, load_config
from avalara_tax.core.exceptions import InvalidRequestError
from avalara_tax.core.models import TaxResult, TaxTransaction
from avalara_tax.core.parsers import parse_tax_response
from avalara_tax.gateway.cache import ResultCache
from avalara_tax.gateway.transport import HttpTransport
from avalara_tax.utils.decorators import audit_log, measure_performance


logger = logging.getLogger(__name__)


class AvalaraClient:
    """
    Computes sales tax through Avalara's GetTax service.

    Usage:
        with AvalaraClient(user_name='1100012345', password='LICENSEKEY',
                           customer_code='CUST-1', company_code='DEFAULT',
                           origin_address=warehouse) as client:
            result = client.get_tax(transaction)
            print(result.total_tax, result.tax_lines[1].rate)
    """

    def __init__(self, config: Optional[ClientConfig] = None, *,
                 transport: Optional[httpx.BaseTransport] = None,
                 **settings):
        """
        Initialize the client.

        Args:
            config: Ready-made configuration; otherwise built from settings
            transport: Optional httpx transport override
            **settings: ClientConfig fields (user_name, password, customer_code,
                        company_code, environment or is_development, origin_address,
                        request_timeout, cache, wire_format, debug)

        Raises:
            ConfigurationError: If a mandatory setting is missing
        """
        self.config = config if config is not None else load_config(**settings)
        self.codec = get_codec(self.config.wire_format)
        self.builder = RequestBuilder(self.config)
        self.cache = ResultCache(self.config.cache)
        self.transport = HttpTransport(self.config, transport=transport)

        logger.info(
            f"AvalaraClient ready: {self.config.environment.value} "
            f"({self.config.url}), format={self.codec.format.value}"
        )

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @measure_performance
    @audit_log
    def get_tax(self, transaction: Union[TaxTransaction, Mapping[str, Any]], *,
                unique_key: Optional[str] = None,
                cache_timespan: Optional[float] = None) -> TaxResult:
        """
        Compute tax for a transaction.

        Args:
            transaction: TaxTransaction, or a mapping with the same fields
            unique_key: Cache key for this transaction
            cache_timespan: Seconds to cache the result; caching needs both this
                            and unique_key plus a configured cache backend

        Returns:
            TaxResult with tax_lines keyed by line number

        Raises:
            InvalidRequestError: If the transaction is malformed or line numbers collide
            TransportError: If the service cannot be reached or answers non-2xx
            ParseError: If the reply cannot be parsed
        """
        if not isinstance(transaction, TaxTransaction):
            try:
                transaction = TaxTransaction.model_validate(transaction)
            except ValidationError as e:
                raise InvalidRequestError(f"Invalid tax transaction: {e}") from e

        return self.cache.compute(
            unique_key, cache_timespan, lambda: self._fetch(transaction)
        )

    def _fetch(self, transaction: TaxTransaction) -> TaxResult:
        request = self.builder.build(transaction)
        body = self.codec.encode(request)
        response = self.transport.send(body, self.codec.content_type)
        return parse_tax_response(response.body, self.codec)
