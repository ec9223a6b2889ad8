"""
Data models for Avalara tax requests and results.
Using Pydantic for validation and type safety.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from dateutil.parser import parse as parse_date
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class Role(IntEnum):
    """
    Position code tying an address to the lines that reference it.
    The values are arbitrary labels; they only have to agree between
    the address list and every line of one request.
    """
    DESTINATION = 1
    ORIGIN = 2


class DetailLevel(str, Enum):
    TAX = "Tax"
    SUMMARY = "Summary"
    DOCUMENT = "Document"
    LINE = "Line"
    DIAGNOSTIC = "Diagnostic"


class DocumentType(str, Enum):
    SALES_ORDER = "SalesOrder"
    SALES_INVOICE = "SalesInvoice"
    PURCHASE_ORDER = "PurchaseOrder"
    PURCHASE_INVOICE = "PurchaseInvoice"
    RETURN_ORDER = "ReturnOrder"
    RETURN_INVOICE = "ReturnInvoice"


def _coerce_date(v):
    # Accepts date, datetime or anything dateutil understands
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str):
        return parse_date(v).date()
    return v


class Address(BaseModel):
    """
    Physical address representation.
    Every field is optional; incomplete addresses degrade accuracy, they are not an error.
    """
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    line_1: Optional[str] = None
    line_2: Optional[str] = None
    line_3: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None  # state or province
    country: Optional[str] = None  # ISO 3166-1 alpha-2
    postal_code: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    tax_region_id: Optional[Union[int, str]] = None


class CartLine(BaseModel):
    """Single purchased item in a transaction"""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    line_number: Optional[int] = None
    item_code: Optional[str] = None
    sku: Optional[str] = None  # same wire field as item_code
    tax_code: Optional[str] = None
    customer_usage_type: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[Decimal] = None
    amount: Optional[Decimal] = None  # extended price, unit price * quantity
    discounted: Optional[bool] = None
    tax_included: Optional[bool] = None
    ref_1: Optional[str] = None
    ref_2: Optional[str] = None


class TaxTransaction(BaseModel):
    """Everything a caller supplies for one tax computation"""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    destination_address: Optional[Address] = None
    origin_address: Optional[Address] = None  # falls back to the client default
    document_date: Optional[date] = None
    cart_lines: List[CartLine] = Field(default_factory=list)
    commit: bool = False

    # Sparse transaction-level fields, sent only when set
    customer_usage_type: Optional[str] = None
    discount: Optional[Decimal] = None
    purchase_order_number: Optional[str] = None
    exemption_number: Optional[str] = None
    detail_level: Optional[DetailLevel] = None
    document_type: Optional[DocumentType] = None
    payment_date: Optional[date] = None
    reference_code: Optional[str] = None

    @field_validator('document_date', 'payment_date', mode='before')
    @classmethod
    def parse_dates(cls, v):
        return _coerce_date(v)


# Wire representation. Field aliases are the service's element names;
# unset fields are dropped by to_wire().

class WireAddress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address_code: Role = Field(alias='AddressCode')
    line_1: Optional[str] = Field(default=None, alias='Line1')
    line_2: Optional[str] = Field(default=None, alias='Line2')
    line_3: Optional[str] = Field(default=None, alias='Line3')
    city: Optional[str] = Field(default=None, alias='City')
    region: Optional[str] = Field(default=None, alias='Region')
    country: Optional[str] = Field(default=None, alias='Country')
    postal_code: Optional[str] = Field(default=None, alias='PostalCode')
    latitude: Optional[Decimal] = Field(default=None, alias='Latitude')
    longitude: Optional[Decimal] = Field(default=None, alias='Longitude')
    tax_region_id: Optional[Union[int, str]] = Field(default=None, alias='TaxRegionId')


class WireLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    line_no: int = Field(alias='LineNo')
    destination_code: Role = Field(default=Role.DESTINATION, alias='DestinationCode')
    origin_code: Role = Field(default=Role.ORIGIN, alias='OriginCode')
    item_code: Optional[str] = Field(default=None, alias='ItemCode')
    tax_code: Optional[str] = Field(default=None, alias='TaxCode')
    customer_usage_type: Optional[str] = Field(default=None, alias='CustomerUsageType')
    description: Optional[str] = Field(default=None, alias='Description')
    quantity: Optional[Decimal] = Field(default=None, alias='Qty')
    amount: Optional[Decimal] = Field(default=None, alias='Amount')
    discounted: Optional[bool] = Field(default=None, alias='Discounted')
    tax_included: Optional[bool] = Field(default=None, alias='TaxIncluded')
    ref_1: Optional[str] = Field(default=None, alias='Ref1')
    ref_2: Optional[str] = Field(default=None, alias='Ref2')


class GetTaxRequest(BaseModel):
    """Complete GetTax request, ready for a wire codec"""
    model_config = ConfigDict(populate_by_name=True)

    doc_date: str = Field(alias='DocDate')
    customer_code: str = Field(alias='CustomerCode')
    company_code: str = Field(alias='CompanyCode')
    commit: bool = Field(default=False, alias='Commit')
    addresses: List[WireAddress] = Field(alias='Addresses')
    lines: List[WireLine] = Field(alias='Lines')

    customer_usage_type: Optional[str] = Field(default=None, alias='CustomerUsageType')
    discount: Optional[Decimal] = Field(default=None, alias='Discount')
    purchase_order_no: Optional[str] = Field(default=None, alias='PurchaseOrderNo')
    exemption_no: Optional[str] = Field(default=None, alias='ExemptionNo')
    detail_level: Optional[DetailLevel] = Field(default=None, alias='DetailLevel')
    doc_type: Optional[DocumentType] = Field(default=None, alias='DocType')
    payment_date: Optional[date] = Field(default=None, alias='PaymentDate')
    reference_code: Optional[str] = Field(default=None, alias='ReferenceCode')

    def to_wire(self) -> Dict[str, Any]:
        """Sparse dict keyed by wire names"""
        return self.model_dump(by_alias=True, exclude_none=True)


# Response side. Unknown fields are kept so nothing the service sends is lost.

class _WireResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True,
                              extra='allow')


class TaxDetail(_WireResult):
    """State, county, city or special-district component of a line's tax"""
    juris_type: Optional[str] = None
    juris_name: Optional[str] = None
    juris_code: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    rate: Optional[Decimal] = None
    taxable: Optional[Decimal] = None
    tax: Optional[Decimal] = None
    tax_name: Optional[str] = None


class TaxLine(_WireResult):
    """Tax computed for one cart line"""
    line_no: Optional[Union[int, str]] = None
    tax_code: Optional[str] = None
    taxability: Optional[bool] = None
    boundary_level: Optional[str] = None
    rate: Optional[Decimal] = None
    taxable: Optional[Decimal] = None
    tax: Optional[Decimal] = None
    tax_calculated: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    exemption: Optional[Decimal] = None
    tax_details: List[TaxDetail] = Field(default_factory=list)


class TaxResult(_WireResult):
    """Caller-facing result of a GetTax call"""
    result_code: Optional[str] = None
    doc_code: Optional[str] = None
    doc_date: Optional[str] = None
    tax_date: Optional[str] = None
    timestamp: Optional[str] = None
    tax_addresses: List[Dict[str, Any]] = Field(default_factory=list)
    tax_lines: Dict[Union[int, str], TaxLine] = Field(default_factory=dict)
    messages: List[Dict[str, Any]] = Field(default_factory=list)

    total_amount: Optional[Decimal] = None
    total_discount: Optional[Decimal] = None
    total_exemption: Optional[Decimal] = None
    total_tax: Optional[Decimal] = None
    total_taxable: Optional[Decimal] = None
    total_tax_calculated: Optional[Decimal] = None

    @property
    def is_success(self) -> bool:
        return self.result_code == 'Success'
