"""
GetTax request construction.
Combines client settings with a caller transaction into a wire-ready request.
"""
import logging
from datetime import date
from typing import List

from avalara_tax.core.config import ClientConfig
from avalara_tax.core.exceptions import InvalidRequestError
from avalara_tax.core.models import (
    CartLine, GetTaxRequest, Role, TaxTransaction, WireLine
)
from avalara_tax.core.normalizers import normalize_address, normalize_line


logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'


class RequestBuilder:
    """
    Builds GetTaxRequest objects for one client.
    Holds only the read-only configuration, so one builder serves concurrent calls.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def build(self, transaction: TaxTransaction) -> GetTaxRequest:
        """
        Compose the full request for a transaction.

        Args:
            transaction: Caller-supplied transaction

        Returns:
            GetTaxRequest with destination then origin address and numbered lines

        Raises:
            InvalidRequestError: If two lines end up with the same line number
        """
        doc_date = transaction.document_date or date.today()
        origin = transaction.origin_address or self.config.origin_address

        addresses = [
            normalize_address(transaction.destination_address, Role.DESTINATION),
            normalize_address(origin, Role.ORIGIN),
        ]
        lines = self._build_lines(transaction.cart_lines)

        request = GetTaxRequest(
            doc_date=doc_date.strftime(DATE_FORMAT),
            customer_code=self.config.customer_code,
            company_code=self.config.company_code,
            commit=transaction.commit,
            addresses=addresses,
            lines=lines,
            customer_usage_type=transaction.customer_usage_type,
            discount=transaction.discount,
            purchase_order_no=transaction.purchase_order_number,
            exemption_no=transaction.exemption_number,
            detail_level=transaction.detail_level,
            doc_type=transaction.document_type,
            payment_date=transaction.payment_date,
            reference_code=transaction.reference_code,
        )

        logger.debug(
            f"Built GetTax request dated {request.doc_date} "
            f"with {len(lines)} line(s), commit={request.commit}"
        )
        return request

    @staticmethod
    def _build_lines(cart_lines: List[CartLine]) -> List[WireLine]:
        lines = []
        seen = set()

        for index, cart_line in enumerate(cart_lines, start=1):
            line = normalize_line(cart_line, index)
            if line.line_no in seen:
                raise InvalidRequestError(
                    f"Duplicate line number {line.line_no} at position {index}"
                )
            seen.add(line.line_no)
            lines.append(line)

        return lines
