"""Shared fixtures for the Avalara client tests."""
import json

import httpx
import pytest

from avalara_tax.core.config import ClientConfig
from avalara_tax.core.models import Address, CartLine, TaxTransaction


SETTINGS = {
    'user_name': '1100012345',
    'password': 'A1B2C3D4E5F6',
    'customer_code': 'CUST-1',
    'company_code': 'DEFAULT',
}


SAMPLE_RESPONSE = {
    'ResultCode': 'Success',
    'DocCode': 'ORD-1',
    'DocDate': '2026-10-18',
    'TaxDate': '2026-10-18',
    'Timestamp': '2026-10-18T16:52:12.713',
    'TotalAmount': '47.97',
    'TotalDiscount': '0',
    'TotalExemption': '0',
    'TotalTaxable': '47.97',
    'TotalTax': '4.32',
    'TotalTaxCalculated': '4.32',
    'TaxAddresses': [
        {'Address': '42 Evergreen Terrace', 'PostalCode': '98101', 'Region': 'WA'},
    ],
    'TaxLines': [
        {
            'LineNo': '2',
            'TaxCode': 'P0000000',
            'Taxability': 'true',
            'Rate': 0.09,
            'Taxable': '38.98',
            'Tax': '3.51',
            'TaxCalculated': '3.51',
            'TaxDetails': [
                {'JurisType': 'State', 'JurisName': 'WASHINGTON', 'Rate': 0.065, 'Tax': '2.53'},
                {'JurisType': 'City', 'JurisName': 'SEATTLE', 'Rate': 0.025, 'Tax': '0.98'},
            ],
        },
        {
            'LineNo': '1',
            'TaxCode': 'P0000000',
            'Taxability': 'true',
            'Rate': 0.09,
            'Taxable': '8.99',
            'Tax': '0.81',
            'TaxCalculated': '0.81',
            'TaxDetails': [],
        },
    ],
}


@pytest.fixture
def warehouse():
    """Default origin address"""
    return Address(line_1='1313 Mockingbird Lane', postal_code='98765')


@pytest.fixture
def customer_address():
    return Address(
        line_1='42 Evergreen Terrace',
        city='Seattle',
        region='WA',
        country='US',
        postal_code='98101'
    )


@pytest.fixture
def config(warehouse):
    return ClientConfig(origin_address=warehouse, **SETTINGS)


@pytest.fixture
def transaction(customer_address):
    return TaxTransaction(
        destination_address=customer_address,
        reference_code='ORD-1',
        cart_lines=[
            CartLine(sku='42ACE', quantity=1, amount='8.99'),
            CartLine(sku='9FCE2', quantity=2, amount='38.98'),
        ]
    )


@pytest.fixture
def sample_body():
    return json.dumps(SAMPLE_RESPONSE).encode('utf-8')


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one response"""

    def __init__(self, status_code=200, content=b'', exc=None):
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated {self.exc.__name__}", request=request)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def calls(self) -> int:
        return len(self.requests)


class RecordingCache:
    """Cache backend that remembers every get and set"""

    def __init__(self, entries=None, set_result=True):
        self.entries = dict(entries or {})
        self.set_result = set_result
        self.get_calls = []
        self.set_calls = []

    def get(self, key):
        self.get_calls.append(key)
        return self.entries.get(key)

    def set(self, key, value, ttl):
        self.set_calls.append((key, value, ttl))
        if self.set_result:
            self.entries[key] = value
        return self.set_result
