"""Parser for HDFC Bank SMS messages."""

from ..base import BankParser
from ..models import TransactionType
from ..patterns import AMOUNT, CURRENCY, compile_all, keyword_table, merchant


class HDFCBankParser(BankParser):
    KEY = "hdfc"
    BANK_NAME = "HDFC Bank"

    SENDER_KEYWORDS = ("HDFC",)
    SENDER_CODES = ("HDFCBK",)
    DLT_CODES = ("HDFCBK", "HDFCBN")

    # E-mandate pre-debit notices announce a future debit
    EXCLUSION_PATTERNS = compile_all(
        r"will\s+be\s+debited",
    )

    AMOUNT_PATTERNS = compile_all(
        # Sent Rs.100.00 From HDFC Bank A/C *1234
        r"sent\s+" + CURRENCY + r"\s*" + AMOUNT,
        # Spent Rs.250 From HDFC Bank Card x1234
        r"spent\s+" + CURRENCY + r"\s*" + AMOUNT,
        CURRENCY + r"\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?debited",
        CURRENCY + r"\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?(?:deposited|credited)",
        r"(?:debited|credited)\s+(?:with|for)\s+" + CURRENCY + r"\s*" + AMOUNT,
    )

    TYPE_KEYWORDS = keyword_table(
        ("spent", TransactionType.EXPENSE),
        ("sent", TransactionType.EXPENSE),
        ("deposited", TransactionType.INCOME),
    )

    MERCHANT_PATTERNS = (
        merchant(r"to\s+VPA\s+([\w.-]+)@"),
        # multi-line "To John Doe\nOn 01/01/24"
        merchant(r"\bto\s+([A-Za-z][A-Za-z .&'-]*?)\s*(?:\n|\s+on\b)"),
        merchant(r"\bat\s+([A-Za-z0-9][\w .&'*-]*?)\s+on\b"),
        # for NEFT Cr-HDFC0000001-ACME CORP-...
        merchant(r"for\s+(?:NEFT|IMPS|RTGS)\s*Cr-[^-]*-([^-]+)-"),
    )

    ACCOUNT_PATTERNS = compile_all(
        r"(?:A/C|Card)\s*[X*]*(\d{4,})",
    )

    BALANCE_PATTERNS = compile_all(
        r"Avl\s+bal:?\s*" + CURRENCY + r"\s*" + AMOUNT,
    )

    REFERENCE_PATTERNS = compile_all(
        r"UPI\s+Ref\s*No\.?\s*(\d+)",
        r"\bRef\s*[:.]?\s*(\d{6,})",
    )
