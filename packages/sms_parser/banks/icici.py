"""Parser for ICICI Bank SMS messages."""

from ..base import BankParser
from ..models import TransactionType
from ..patterns import AMOUNT, CURRENCY, compile_all, keyword_table, merchant


class ICICIBankParser(BankParser):
    KEY = "icici"
    BANK_NAME = "ICICI Bank"

    SENDER_KEYWORDS = ("ICICI",)
    SENDER_CODES = ("ICICIB",)
    DLT_CODES = ("ICICIB", "ICICIT")

    AMOUNT_PATTERNS = compile_all(
        # Acct XX123 debited for Rs 500.00
        r"debited\s+(?:for|with)\s+" + CURRENCY + r"\s*" + AMOUNT,
        r"credited\s+with\s+" + CURRENCY + r"\s*" + AMOUNT,
        # INR 2,000.00 spent using ICICI Bank Card
        CURRENCY + r"\s*" + AMOUNT + r"\s+spent",
    )

    TYPE_KEYWORDS = keyword_table(
        ("spent using", TransactionType.EXPENSE),
        ("autopay", TransactionType.EXPENSE),
    )

    MERCHANT_PATTERNS = (
        # ...on 01-Jan-24; Amazon credited.
        merchant(r";\s*([^;.]+?)\s+credited"),
        merchant(r"\bfrom\s+([A-Za-z][A-Za-z .&'-]*?)\.\s*UPI"),
        # ...on 01-Jan-24 on AMAZON.
        merchant(r"\d{2}-\w{3}-\d{2,4}\s+on\s+([^.]+?)\."),
    )

    ACCOUNT_PATTERNS = compile_all(
        r"(?:Acct|Card)\s+[X*]*(\d{4,})",
    )

    BALANCE_PATTERNS = compile_all(
        r"Avl\s+Bal(?:ance)?:?\s*" + CURRENCY + r"\s*" + AMOUNT,
    )

    REFERENCE_PATTERNS = compile_all(
        r"UPI:\s*(\d+)",
        r"RRN\s*:?\s*(\d+)",
    )
