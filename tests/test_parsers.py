"""
Unit tests for GetTax response parsing.
"""
import json
import logging
from decimal import Decimal

import pytest

from avalara_tax.core.codecs import JSONWireCodec, XMLWireCodec
from avalara_tax.core.exceptions import ParseError
from avalara_tax.core.models import TaxLine, TaxResult
from avalara_tax.core.parsers import parse_tax_response, reshape_tax_lines


class TestReshapeTaxLines:

    def test_keys_follow_line_numbers_not_order(self):
        lines = [{'LineNo': 3, 'Tax': 'c'}, {'LineNo': 1, 'Tax': 'a'}, {'LineNo': 2, 'Tax': 'b'}]

        result = reshape_tax_lines(lines)

        assert set(result) == {1, 2, 3}
        assert result[3] is lines[0]
        assert result[1] is lines[1]
        assert result[2] is lines[2]

    def test_duplicate_line_number_last_wins(self, caplog):
        first = {'LineNo': 1, 'Tax': 'A'}
        second = {'LineNo': 1, 'Tax': 'B'}

        with caplog.at_level(logging.WARNING):
            result = reshape_tax_lines([first, second])

        assert result == {1: second}
        assert 'Duplicate line number 1' in caplog.text

    def test_numeric_text_keys_become_ints(self):
        result = reshape_tax_lines([{'LineNo': '7'}, {'LineNo': 'A-1'}])

        assert set(result) == {7, 'A-1'}

    def test_empty(self):
        assert reshape_tax_lines([]) == {}


class TestParseTaxResponse:

    def test_full_json_response(self, sample_body):
        result = parse_tax_response(sample_body, JSONWireCodec())

        assert isinstance(result, TaxResult)
        assert result.is_success
        assert result.total_tax == Decimal('4.32')
        assert result.total_amount == Decimal('47.97')
        assert result.tax_date == '2026-10-18'
        assert set(result.tax_lines) == {1, 2}

        line = result.tax_lines[2]
        assert isinstance(line, TaxLine)
        assert line.rate == Decimal('0.09')
        assert line.tax == Decimal('3.51')
        assert line.taxability is True
        assert [d.juris_name for d in line.tax_details] == ['WASHINGTON', 'SEATTLE']

    def test_unknown_fields_passed_through(self):
        body = json.dumps({'ResultCode': 'Success', 'Locked': True, 'TaxLines': []}).encode()

        result = parse_tax_response(body, JSONWireCodec())

        assert result.model_extra == {'Locked': True}

    def test_missing_tax_lines(self):
        result = parse_tax_response(b'{"ResultCode": "Error", "Messages": []}', JSONWireCodec())

        assert result.tax_lines == {}
        assert not result.is_success

    def test_xml_response(self):
        body = b"""<GetTaxResult>
  <ResultCode>Success</ResultCode>
  <TotalTax>0.62</TotalTax>
  <TaxLines>
    <TaxLine><LineNo>2</LineNo><Tax>0.40</Tax></TaxLine>
    <TaxLine><LineNo>1</LineNo><Tax>0.22</Tax></TaxLine>
  </TaxLines>
</GetTaxResult>"""

        result = parse_tax_response(body, XMLWireCodec())

        assert result.total_tax == Decimal('0.62')
        assert result.tax_lines[1].tax == Decimal('0.22')
        assert result.tax_lines[2].tax == Decimal('0.40')

    def test_xml_response_with_empty_address(self):
        body = b"""<GetTaxResult>
  <ResultCode>Success</ResultCode>
  <TaxAddresses><TaxAddress/></TaxAddresses>
  <TaxLines><TaxLine><LineNo>1</LineNo><Tax>0.22</Tax></TaxLine></TaxLines>
</GetTaxResult>"""

        result = parse_tax_response(body, XMLWireCodec())

        assert result.is_success
        assert result.tax_addresses == []
        assert result.tax_lines[1].tax == Decimal('0.22')

    def test_malformed_body(self):
        with pytest.raises(ParseError):
            parse_tax_response(b'<html>Bad Gateway</html>', JSONWireCodec())

    def test_tax_lines_of_wrong_shape(self):
        with pytest.raises(ParseError):
            parse_tax_response(b'{"TaxLines": "none"}', JSONWireCodec())

    def test_content_that_does_not_validate(self):
        with pytest.raises(ParseError):
            parse_tax_response(b'{"TotalTax": "lots"}', JSONWireCodec())
