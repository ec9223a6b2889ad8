"""
Wire codecs for the GetTax exchange.
JSON is the current format; XML is kept for accounts still on the older interface.
"""
import json
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict
from xml.parsers.expat import ExpatError

import xmltodict

from avalara_tax.core.config import WireFormat
from avalara_tax.core.exceptions import ParseError
from avalara_tax.core.models import GetTaxRequest


def _prepare(value: Any, render_bool: Callable[[bool], Any]) -> Any:
    """Convert a to_wire() tree into plain values using the codec's boolean convention"""
    if isinstance(value, dict):
        return {k: _prepare(v, render_bool) for k, v in value.items()}
    if isinstance(value, list):
        return [_prepare(v, render_bool) for v in value]
    if isinstance(value, bool):
        return render_bool(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


class WireCodec:
    """Encodes requests and decodes responses for one wire format"""

    format: WireFormat
    content_type: str

    def encode(self, request: GetTaxRequest) -> bytes:
        raise NotImplementedError

    def decode(self, body: bytes) -> Dict[str, Any]:
        raise NotImplementedError


class JSONWireCodec(WireCodec):
    """
    JSON body, the default.
    Booleans go out as the text "true"/"false"; amounts as decimal strings.
    """

    format = WireFormat.JSON
    content_type = 'text/json'

    @staticmethod
    def _render_bool(value: bool) -> str:
        return 'true' if value else 'false'

    def encode(self, request: GetTaxRequest) -> bytes:
        payload = _prepare(request.to_wire(), self._render_bool)
        return json.dumps(payload, ensure_ascii=True, indent=2).encode('ascii')

    def decode(self, body: bytes) -> Dict[str, Any]:
        try:
            data = json.loads(body, parse_float=Decimal)
        except ValueError as e:
            raise ParseError(f"Failed to parse JSON response: {str(e)}") from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return data


class XMLWireCodec(WireCodec):
    """
    XML body rooted at GetTaxRequest / GetTaxResult.
    Booleans go out as 1/0.
    """

    format = WireFormat.XML
    content_type = 'text/xml; charset=utf-8'

    REQUEST_ROOT = 'GetTaxRequest'

    # container element -> repeated child element
    REQUEST_CONTAINERS = {
        'Addresses': 'Address',
        'Lines': 'Line',
    }
    RESPONSE_CONTAINERS = {
        'TaxLines': 'TaxLine',
        'TaxAddresses': 'TaxAddress',
        'Messages': 'Message',
    }
    LINE_CONTAINERS = {
        'TaxDetails': 'TaxDetail',
    }

    @staticmethod
    def _render_bool(value: bool) -> str:
        return '1' if value else '0'

    def encode(self, request: GetTaxRequest) -> bytes:
        payload = _prepare(request.to_wire(), self._render_bool)

        for container, item in self.REQUEST_CONTAINERS.items():
            payload[container] = {item: payload.get(container, [])}

        document = xmltodict.unparse({self.REQUEST_ROOT: payload},
                                     encoding='utf-8', pretty=True)
        return document.encode('utf-8')

    def decode(self, body: bytes) -> Dict[str, Any]:
        repeated = tuple(self.RESPONSE_CONTAINERS.values()) + tuple(self.LINE_CONTAINERS.values())
        try:
            tree = xmltodict.parse(body, force_list=repeated)
        except ExpatError as e:
            raise ParseError(f"Failed to parse XML response: {str(e)}") from e

        if len(tree) != 1:
            raise ParseError("XML response must have exactly one root element")

        root = next(iter(tree.values())) or {}
        if not isinstance(root, dict):
            raise ParseError("XML response root holds no elements")

        data = {k: v for k, v in root.items() if not k.startswith('@')}
        self._flatten(data, self.RESPONSE_CONTAINERS)
        for line in data.get('TaxLines', []):
            if isinstance(line, dict):
                self._flatten(line, self.LINE_CONTAINERS)
        return data

    @staticmethod
    def _flatten(node: Dict[str, Any], containers: Dict[str, str]):
        """Replace <TaxLines><TaxLine/>...</TaxLines> style wrappers with plain lists"""
        for container, item in containers.items():
            if container not in node:
                continue
            value = node[container]
            if isinstance(value, dict):
                # empty child elements such as <TaxAddress/> decode to None
                node[container] = [v for v in value.get(item) or [] if v is not None]
            elif value is None:
                node[container] = []


_CODECS = {
    WireFormat.JSON: JSONWireCodec,
    WireFormat.XML: XMLWireCodec,
}


def get_codec(wire_format: WireFormat = WireFormat.JSON) -> WireCodec:
    """
    Return the codec for a wire format.

    Raises:
        ValueError: If the format is unknown
    """
    try:
        return _CODECS[WireFormat(wire_format)]()
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unsupported wire format: {wire_format}") from e
