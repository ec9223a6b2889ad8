"""
Address and cart line normalization.
Maps caller-side records onto their wire counterparts, emitting only the fields that are set.
"""
from typing import Optional

from avalara_tax.core.models import Address, CartLine, Role, WireAddress, WireLine


def normalize_address(address: Optional[Address], role: Role) -> WireAddress:
    """
    Convert an address into its wire record tagged with a position code.

    Args:
        address: Address to convert; None yields a record holding only the code
        role: DESTINATION or ORIGIN

    Returns:
        WireAddress
    """
    fields = address.model_dump(exclude_none=True) if address is not None else {}
    return WireAddress(address_code=role, **fields)


def normalize_line(line: CartLine, sequential_index: int) -> WireLine:
    """
    Convert a cart line into its wire record.

    Args:
        line: Cart line to convert
        sequential_index: 1-based position of the line, used when it has no line number

    Returns:
        WireLine anchored to both the destination and the origin address
    """
    fields = line.model_dump(exclude_none=True)
    line_number = fields.pop('line_number', None)

    # item_code and sku share ItemCode; applied in this order, so sku wins
    item_code = fields.pop('item_code', None)
    sku = fields.pop('sku', None)
    for value in (item_code, sku):
        if value is not None:
            fields['item_code'] = value

    return WireLine(
        line_no=line_number if line_number is not None else sequential_index,
        destination_code=Role.DESTINATION,
        origin_code=Role.ORIGIN,
        **fields
    )
