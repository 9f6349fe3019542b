"""Parser for Axis Bank SMS messages."""

from ..base import BankParser
from ..models import TransactionType
from ..patterns import AMOUNT, compile_all, keyword_table, merchant


class AxisBankParser(BankParser):
    KEY = "axis"
    BANK_NAME = "Axis Bank"

    SENDER_KEYWORDS = ("AXIS",)
    SENDER_CODES = ("AXISBK",)
    DLT_CODES = ("AXISBK", "AXISMR")

    AMOUNT_PATTERNS = compile_all(
        r"INR\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?(?:debited|credited)",
        r"Spent\s+(?:INR|Rs\.?)\s*" + AMOUNT,
    )

    TYPE_KEYWORDS = keyword_table(
        ("spent", TransactionType.EXPENSE),
    )

    MERCHANT_PATTERNS = (
        # UPI/P2M/412345678901/AMAZON
        merchant(r"UPI/P2[AM]/\d+/([^/\n.]+)"),
        merchant(r"(?:NEFT|IMPS|RTGS)/[^/]*/([^/\n.]+)"),
        # card spends: ...10:00:00 IST AMAZON Avl Limit
        merchant(r"IST\s+([A-Za-z0-9][\w .&*'-]*?)\s+Avl"),
    )

    ACCOUNT_PATTERNS = compile_all(
        r"A/c\s+no\.?\s*[X*]*(\d{4,})",
        r"Card\s+no\.?\s*[X*]*(\d{4,})",
    )

    BALANCE_PATTERNS = compile_all(
        r"Avl\s+Bal-?\s*(?:INR|Rs\.?)\s*" + AMOUNT,
    )

    REFERENCE_PATTERNS = compile_all(
        r"UPI/P2[AM]/(\d+)/",
    )
