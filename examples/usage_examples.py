"""
Example usage of the Avalara tax client.
Demonstrates the common call patterns against the development endpoint.
"""
from avalara_tax import (
    Address,
    AvalaraClient,
    CartLine,
    DocumentType,
    Environment,
    InMemoryCache,
    TaxTransaction,
    TransportError,
    WireFormat,
)
from avalara_tax.utils import setup_logging


WAREHOUSE = Address(line_1='1313 Mockingbird Lane', postal_code='98765')

CREDENTIALS = dict(
    user_name='1100012345',
    password='YOUR-LICENSE-KEY',
    customer_code='CUST-1',
    company_code='DEFAULT',
    environment=Environment.DEVELOPMENT,
)


def sample_transaction(commit: bool = False) -> TaxTransaction:
    return TaxTransaction(
        destination_address=Address(
            line_1='42 Evergreen Terrace',
            city='Springfield',
            postal_code='12345',
        ),
        cart_lines=[
            CartLine(sku='42ACE', quantity=1, amount='8.99'),
            CartLine(sku='9FCE2', quantity=2, amount='38.98'),
        ],
        document_type=DocumentType.SALES_INVOICE if commit else None,
        reference_code='ORDER-1001',
        commit=commit,
    )


def example_quote():
    """Example: Quote tax for a cart"""
    print("Example 1: Tax Quote")
    print("-" * 50)

    with AvalaraClient(origin_address=WAREHOUSE, **CREDENTIALS) as client:
        result = client.get_tax(sample_transaction())

    print(f"Result: {result.result_code}")
    print(f"Total tax: {result.total_tax}")
    for line_no, line in sorted(result.tax_lines.items()):
        print(f"  Line {line_no}: rate {line.rate}, tax {line.tax}")
    print()


def example_cached_quote():
    """Example: Repeated quotes for the same cart served from a cache"""
    print("Example 2: Cached Quote")
    print("-" * 50)

    cache = InMemoryCache()  # or a memcached / redis client
    with AvalaraClient(origin_address=WAREHOUSE, cache=cache, **CREDENTIALS) as client:
        for _ in range(3):
            result = client.get_tax(
                sample_transaction(),
                unique_key='cart-ORDER-1001',
                cache_timespan=300,
            )
            print(f"Total tax: {result.total_tax}")
    print()


def example_commit_with_xml():
    """Example: Commit a final invoice using the XML wire format"""
    print("Example 3: Committed Invoice (XML)")
    print("-" * 50)

    with AvalaraClient(origin_address=WAREHOUSE, wire_format=WireFormat.XML,
                       request_timeout=10, **CREDENTIALS) as client:
        try:
            result = client.get_tax(sample_transaction(commit=True))
            print(f"Committed: {result.doc_code} tax={result.total_tax}")
        except TransportError as e:
            print(f"Service unavailable ({e.kind.value}): {e}")
    print()


if __name__ == '__main__':
    setup_logging(verbose=True)

    example_quote()
    example_cached_quote()
    example_commit_with_xml()
