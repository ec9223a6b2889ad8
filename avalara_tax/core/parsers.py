"""
GetTax response parsing.
Decodes the service reply and re-keys per-line results by line number.
"""
import logging
from typing import Any, Dict, Iterable, Union

from pydantic import ValidationError

from avalara_tax.core.codecs import WireCodec
from avalara_tax.core.exceptions import ParseError
from avalara_tax.core.models import TaxResult


logger = logging.getLogger(__name__)


def _line_key(line_no: Any) -> Union[int, str]:
    # XML delivers every value as text; keep numeric line numbers numeric
    if isinstance(line_no, str) and line_no.strip().isdigit():
        return int(line_no)
    return line_no


def reshape_tax_lines(lines: Iterable[Dict[str, Any]]) -> Dict[Union[int, str], Dict[str, Any]]:
    """
    Turn the flat TaxLines list into a mapping keyed by line number.

    When the service repeats a line number the later entry replaces the earlier one.

    Args:
        lines: Per-line results as sent by the service

    Returns:
        Dictionary of line number -> line result
    """
    by_number = {}

    for line in lines:
        key = _line_key(line.get('LineNo'))
        if key in by_number:
            logger.warning(
                f"Duplicate line number {key} in tax response; keeping the last entry"
            )
        by_number[key] = line

    return by_number


def parse_tax_response(body: bytes, codec: WireCodec) -> TaxResult:
    """
    Parse a GetTax response body.

    Args:
        body: Raw response body
        codec: Codec matching the format the request was sent in

    Returns:
        TaxResult with TaxLines keyed by line number

    Raises:
        ParseError: If the body is malformed or does not describe a tax result
    """
    data = codec.decode(body)

    lines = data.pop('TaxLines', None) or []
    if not isinstance(lines, list) or not all(isinstance(line, dict) for line in lines):
        raise ParseError("TaxLines must be a list of line results")
    data['TaxLines'] = reshape_tax_lines(lines)

    try:
        return TaxResult.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Unexpected GetTax response content: {str(e)}") from e
