"""
Avalara Tax Client

A Python client for Avalara's REST sales tax service (GetTax).
"""

__version__ = '1.0.3'
__license__ = 'GPL-3.0'

from avalara_tax.core import (
    Address,
    CartLine,
    TaxTransaction,
    TaxResult,
    ClientConfig,
    Environment,
    WireFormat,
    DetailLevel,
    DocumentType,
    AvalaraError,
    ConfigurationError,
    InvalidRequestError,
    TransportError,
    TransportErrorKind,
    ParseError,
    CacheError,
)

from avalara_tax.gateway import (
    AvalaraClient,
    InMemoryCache
)

__all__ = [
    'AvalaraClient',
    'InMemoryCache',
    'Address',
    'CartLine',
    'TaxTransaction',
    'TaxResult',
    'ClientConfig',
    'Environment',
    'WireFormat',
    'DetailLevel',
    'DocumentType',
    'AvalaraError',
    'ConfigurationError',
    'InvalidRequestError',
    'TransportError',
    'TransportErrorKind',
    'ParseError',
    'CacheError',
]
