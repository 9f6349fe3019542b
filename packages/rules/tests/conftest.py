from decimal import Decimal

import pytest

from packages.rules.engine import RuleEngine
from packages.sms_parser.models import ExtractedTransaction, TransactionType


@pytest.fixture
def transaction():
    return ExtractedTransaction(
        amount=Decimal("150"),
        transaction_type=TransactionType.EXPENSE,
        bank_name="State Bank of India",
        source_text="A/C X1234 debited by 150.00 on date 01Jan24 trf to AMZN123 Refno 412345678901",
        source_sender="AX-SBIBK-S",
        timestamp=1704067200000,  # 2024-01-01T00:00:00Z
        merchant="AMZN123",
        account_last4="1234",
        reference_id="412345678901",
        mode="UPI",
        upi_id="amzn123@paytm",
    )


@pytest.fixture
def engine():
    return RuleEngine()
