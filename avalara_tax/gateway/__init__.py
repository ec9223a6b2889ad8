"""Avalara tax client - Gateway Package"""

from avalara_tax.gateway.cache import InMemoryCache, ResultCache
from avalara_tax.gateway.client import AvalaraClient
from avalara_tax.gateway.transport import HttpTransport, TransportResponse

__all__ = [
    'AvalaraClient',
    'HttpTransport',
    'TransportResponse',
    'ResultCache',
    'InMemoryCache',
]
