"""Avalara tax client - Core Package"""

from avalara_tax.core.models import (
    Address,
    CartLine,
    TaxTransaction,
    TaxResult,
    TaxLine,
    Role,
    DetailLevel,
    DocumentType,
)
from avalara_tax.core.config import ClientConfig, Environment, WireFormat, load_config
from avalara_tax.core.exceptions import (
    AvalaraError,
    ConfigurationError,
    InvalidRequestError,
    TransportError,
    TransportErrorKind,
    ParseError,
    CacheError,
)
from avalara_tax.core.builders import RequestBuilder
from avalara_tax.core.codecs import JSONWireCodec, XMLWireCodec, get_codec
from avalara_tax.core.parsers import parse_tax_response, reshape_tax_lines

__all__ = [
    'Address',
    'CartLine',
    'TaxTransaction',
    'TaxResult',
    'TaxLine',
    'Role',
    'DetailLevel',
    'DocumentType',
    'ClientConfig',
    'Environment',
    'WireFormat',
    'load_config',
    'AvalaraError',
    'ConfigurationError',
    'InvalidRequestError',
    'TransportError',
    'TransportErrorKind',
    'ParseError',
    'CacheError',
    'RequestBuilder',
    'JSONWireCodec',
    'XMLWireCodec',
    'get_codec',
    'parse_tax_response',
    'reshape_tax_lines',
]
