"""Parser for State Bank of India (SBI) SMS messages."""

from ..base import BankParser
from ..models import TransactionType
from ..patterns import AMOUNT, compile_all, keyword_table, merchant


class SBIBankParser(BankParser):
    KEY = "sbi"
    BANK_NAME = "State Bank of India"

    # SBIINB, SBIUPI, SBICRD and ATMSBI all contain "SBI"
    SENDER_KEYWORDS = ("SBI",)
    SENDER_CODES = ("SBIBK", "SBIBNK")
    DLT_CODES = ("SBIBK", "SBI")

    EXCLUSION_PATTERNS = compile_all(
        r"e-statement\s+of\s+sbi\s+credit\s+card",
    )

    AMOUNT_PATTERNS = compile_all(
        # A/C debited by 20.0 (UPI format)
        r"debited\s+by\s+" + AMOUNT,
        r"Rs\.?\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?debited",
        r"INR\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?debited",
        r"Rs\.?\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?credited",
        r"INR\s*" + AMOUNT + r"\s+(?:has\s+been\s+)?credited",
        r"withdrawn\s+Rs\.?\s*" + AMOUNT,
        r"transferred\s+Rs\.?\s*" + AMOUNT,
        # paid to MERCHANT@upi Rs 500
        r"paid\s+to\s+[\w.-]+@\w+\s+Rs\.?\s*" + AMOUNT,
        r"ATM\s+withdrawal\s+of\s+Rs\.?\s*" + AMOUNT,
        # Yono Cash Rs 3000 w/d@SBI ATM
        r"Yono\s+Cash\s+Rs\.?\s*" + AMOUNT,
    )

    TYPE_KEYWORDS = keyword_table(
        ("withdrawn", TransactionType.EXPENSE),
        ("transferred", TransactionType.EXPENSE),
        ("paid to", TransactionType.EXPENSE),
        ("atm withdrawal", TransactionType.EXPENSE),
        ("yono cash", TransactionType.EXPENSE),
    )

    MERCHANT_PATTERNS = (
        # trf to Mrs Shopkeeper Refno 1234
        merchant(r"trf\s+to\s+([^.\n]+?)(?:\s+Ref|$)"),
        merchant(r"paid\s+to\s+([\w.-]+)@\w+"),
        merchant(r"w/d@SBI\s+ATM\s+([A-Z0-9]+)", label="YONO Cash ATM - {}", validate=False),
        merchant(r"ATM\s+(?:withdrawal\s+)?(?:at\s+)?([^.\n]+?)(?:\s+on|\s+Avl)", label="ATM - {}"),
        merchant(r"(?:NEFT|IMPS|RTGS)[^:]*:\s*([^.\n]+?)(?:\s+Ref|\s+on|$)"),
    )

    ACCOUNT_PATTERNS = compile_all(
        r"A/c\s+[X*]*(\d{4,})",
        r"A/c\s+ending\s+(\d{4,})",
        r"a/c\s+no\.?\s+[X*]*(\d{4,})",
    )

    BALANCE_PATTERNS = compile_all(
        r"Avl\s+Bal\s+Rs\.?\s*" + AMOUNT,
        r"Available\s+Balance:?\s+Rs\.?\s*" + AMOUNT,
        r"Bal:?\s+Rs\.?\s*" + AMOUNT,
    )

    REFERENCE_PATTERNS = compile_all(
        r"Ref\s+No\.?\s*(\w+)",
        r"Txn#\s*(\w+)",
        r"transaction\s+ID:?\s*(\w+)",
    )
