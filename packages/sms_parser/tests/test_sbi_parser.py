"""SBI parser: pattern-order pins and real message shapes."""

from decimal import Decimal

import pytest

from packages.sms_parser.banks import HDFCBankParser, SBIBankParser
from packages.sms_parser.models import TransactionType


@pytest.fixture
def parser():
    return SBIBankParser()


class TestSBISender:

    @pytest.mark.parametrize(
        "sender",
        ["SX-SBIBK-S", "AX-SBIBK-T", "ad-sbibk-p", "JD-SBIBK-G", "VM-SBIBK", "BZ-SBI",
         "SBIBK", "SBIBNK", "SBIINB", "ATMSBI", " sbiupi "],
    )
    def test_accepts_sbi_senders(self, parser, sender):
        assert parser.can_handle(sender)

    @pytest.mark.parametrize("sender", ["VM-HDFCBK", "AX-AXISBK-S", "", "BANK"])
    def test_rejects_other_senders(self, parser, sender):
        assert not parser.can_handle(sender)


class TestSBIAmountOrder:
    """The first pattern in SBI's table wins, whatever the text order."""

    def test_debited_before_credited(self, parser):
        text = "Rs 200 credited to A/c XX5678 after Rs 500 debited from A/c XX1234"
        assert parser.extract_amount(text) == Decimal("500")

    def test_debited_by_before_rs_debited(self, parser):
        text = "Rs 300 debited; A/C X1234 debited by 20.00 on 01Jan24"
        assert parser.extract_amount(text) == Decimal("20.00")

    def test_inr_debited_before_rs_credited(self, parser):
        text = "Rs 75 credited as cashback. INR 1,250.50 debited from A/c XX1234"
        assert parser.extract_amount(text) == Decimal("1250.50")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Cash withdrawn Rs 1,500 from A/c XX1234", Decimal("1500")),
            ("You have transferred Rs 750 to John Doe on 01-01-24", Decimal("750")),
            ("You have paid to zomato@paytm Rs 450.50 from A/c XX1234 on 01-01-24.",
             Decimal("450.50")),
            ("ATM withdrawal of Rs 2,000.00 from A/c XX1234 on 01-01-24", Decimal("2000.00")),
            ("Yono Cash Rs 3000 w/d@SBI ATM S1NW000093009 on 01Jan24", Decimal("3000")),
            ("Your A/c XX1234 is credited by Rs 10,000.00 on 01-01-24", Decimal("10000.00")),
            ("Rs 1,00,000 credited to A/c XX1234", Decimal("100000")),
        ],
    )
    def test_amount_phrasings(self, parser, text, expected):
        assert parser.extract_amount(text) == expected

    def test_zero_literal_falls_through(self, parser):
        assert parser.extract_amount("Rs 0.00 debited from A/c XX1234") is None


class TestSBIFields:

    def test_upi_debit(self, parser):
        text = (
            "Dear UPI user A/C X1234 debited by 20.0 on date 01Jan24 trf to Mrs Shopkeeper "
            "Refno 412345678901. If not u? call 1800111109. -SBI"
        )
        assert parser.is_transaction_message(text)
        assert parser.extract_amount(text) == Decimal("20.0")
        assert parser.extract_transaction_type(text) is TransactionType.EXPENSE
        assert parser.extract_merchant(text, "AX-SBIBK-S") == "Mrs Shopkeeper"
        assert parser.extract_account_last4(text) == "1234"
        assert parser.extract_reference(text) == "412345678901"
        assert parser.extract_mode(text) == "UPI"

    def test_paid_to_vpa(self, parser):
        text = "You have paid to zomato@paytm Rs 450.50 from A/c XX1234 on 01-01-24."
        assert parser.extract_transaction_type(text) is TransactionType.EXPENSE
        assert parser.extract_merchant(text, "SBIUPI") == "zomato"
        assert parser.extract_upi_id(text) == "zomato@paytm"
        assert parser.extract_mode(text) == "UPI"

    def test_yono_cash_synthesizes_atm_label(self, parser):
        text = (
            "Yono Cash Rs 3000 w/d@SBI ATM S1NW000093009 on 01Jan24 from A/c X1234. "
            "Avl Bal Rs 12000.00"
        )
        assert parser.is_transaction_message(text)
        assert parser.extract_transaction_type(text) is TransactionType.EXPENSE
        assert parser.extract_merchant(text, "ATMSBI") == "YONO Cash ATM - S1NW000093009"
        assert parser.extract_balance(text) == Decimal("12000.00")
        assert parser.extract_mode(text) == "ATM"
        assert parser.extract_upi_id(text) is None

    def test_atm_location_label(self, parser):
        text = (
            "Rs.2000 withdrawn at ATM MG ROAD BANGALORE on 01Jan24 from A/c X1234. "
            "Avl Bal Rs 5000"
        )
        assert parser.extract_amount(text) == Decimal("2000")
        assert parser.extract_transaction_type(text) is TransactionType.EXPENSE
        assert parser.extract_merchant(text, "ATMSBI") == "ATM - MG ROAD BANGALORE"
        assert parser.extract_balance(text) == Decimal("5000")

    def test_neft_credit_beneficiary(self, parser):
        text = (
            "Your A/c XX1234 is credited by Rs 10,000.00 on 01-01-24 via NEFT from: "
            "ACME CORP Ref No 987654321"
        )
        assert parser.extract_transaction_type(text) is TransactionType.INCOME
        assert parser.extract_merchant(text, "SBIINB") == "ACME CORP"
        assert parser.extract_reference(text) == "987654321"
        assert parser.extract_mode(text) == "NEFT"

    def test_transferred_falls_back_to_default_merchant(self, parser):
        text = "You have transferred Rs 750 to John Doe on 01-01-24"
        assert parser.extract_transaction_type(text) is TransactionType.EXPENSE
        assert parser.extract_merchant(text, "SBIINB") == "John Doe"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("debited from A/c XX1234", "1234"),
            ("debited from A/c ending 5678", "5678"),
            ("debited from a/c no. XX9012", "9012"),
            ("debited from A/c 001234567890", "7890"),
        ],
    )
    def test_account_last4(self, parser, text, expected):
        assert parser.extract_account_last4(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Txn# TX998877 done", "TX998877"),
            ("transaction ID: 55667788", "55667788"),
        ],
    )
    def test_reference_phrasings(self, parser, text, expected):
        assert parser.extract_reference(text) == expected


class TestSBIMessageFilter:

    def test_estatement_is_suppressed(self, parser):
        text = "E-statement of SBI Credit Card has been sent to your email. Rs 500 debited"
        assert not parser.is_transaction_message(text)
        # the exclusion is SBI-specific
        assert HDFCBankParser().is_transaction_message(text)

    def test_shared_exclusions_still_apply(self, parser):
        assert not parser.is_transaction_message("Your OTP for login is 482913")
        assert not parser.is_transaction_message(
            "Congratulations! You are pre-approved for a loan of Rs 5,00,000"
        )

    def test_needs_a_transaction_verb(self, parser):
        assert not parser.is_transaction_message("Dear Customer, your KYC is updated.")
