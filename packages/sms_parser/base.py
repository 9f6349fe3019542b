"""
Base bank SMS parser.

Each institution subclasses ``BankParser`` and declares only its own pattern
tables. Every ``extract_*`` method tries the institution table first, in
order, then defers to the shared defaults in ``patterns``.
"""

import re
from decimal import Decimal
from typing import Optional, Pattern, Tuple

from . import patterns
from .merchant import MerchantExtractor
from .models import TransactionType
from .patterns import MerchantPattern

# <2-letter operator prefix>-<BRANDCODE>[-<S|T|P|G>]
DLT_TEMPLATE = r"^[A-Z]{{2}}-(?:{codes})(?:-[STPG])?$"


class BankParser:
    """Shared extraction logic with per-bank pattern overrides."""

    KEY: str = ""
    BANK_NAME: str = ""

    # Sender identification
    SENDER_KEYWORDS: Tuple[str, ...] = ()  # substring containment
    SENDER_CODES: Tuple[str, ...] = ()  # exact short codes
    DLT_CODES: Tuple[str, ...] = ()  # brand codes inside DLT headers

    # Override tables, tried before the defaults
    EXCLUSION_PATTERNS: Tuple[Pattern, ...] = ()
    AMOUNT_PATTERNS: Tuple[Pattern, ...] = ()
    TYPE_KEYWORDS: Tuple[Tuple[Pattern, TransactionType], ...] = ()  # whole words
    MERCHANT_PATTERNS: Tuple[MerchantPattern, ...] = ()
    ACCOUNT_PATTERNS: Tuple[Pattern, ...] = ()
    BALANCE_PATTERNS: Tuple[Pattern, ...] = ()
    REFERENCE_PATTERNS: Tuple[Pattern, ...] = ()

    def __init__(self, merchant_extractor: Optional[MerchantExtractor] = None):
        self.merchant_extractor = merchant_extractor or MerchantExtractor()
        self._dlt_pattern = None
        if self.DLT_CODES:
            codes = "|".join(re.escape(c.upper()) for c in self.DLT_CODES)
            self._dlt_pattern = re.compile(DLT_TEMPLATE.format(codes=codes))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.BANK_NAME!r})"

    def can_handle(self, sender: str) -> bool:
        if not sender:
            return False

        normalized = sender.strip().upper()
        if any(keyword in normalized for keyword in self.SENDER_KEYWORDS):
            return True
        if normalized in self.SENDER_CODES:
            return True
        return bool(self._dlt_pattern and self._dlt_pattern.match(normalized))

    def is_transaction_message(self, message: str) -> bool:
        """Filter out OTP, promotional and statement notices."""
        if patterns.any_match(self.EXCLUSION_PATTERNS, message):
            return False

        if patterns.any_match(patterns.NON_TRANSACTION_PATTERNS, message):
            return False
        return patterns.any_match(patterns.TRANSACTION_KEYWORDS, message)

    def extract_amount(self, message: str) -> Optional[Decimal]:
        amount = patterns.first_amount(self.AMOUNT_PATTERNS, message)
        if amount is None:
            amount = patterns.first_amount(patterns.DEFAULT_AMOUNT_PATTERNS, message)
        return amount

    def extract_transaction_type(self, message: str) -> Optional[TransactionType]:
        transaction_type = patterns.first_label(self.TYPE_KEYWORDS, message)
        if transaction_type is None:
            transaction_type = patterns.first_label(patterns.DEFAULT_TYPE_PATTERNS, message)
        return transaction_type

    def extract_merchant(self, message: str, sender: str) -> Optional[str]:
        for entry in self.MERCHANT_PATTERNS + patterns.DEFAULT_MERCHANT_PATTERNS:
            name = self._apply_merchant_pattern(entry, message)
            if name:
                return name

        return self.merchant_extractor.match_known(message)

    def extract_account_last4(self, message: str) -> Optional[str]:
        digits = patterns.first_group(self.ACCOUNT_PATTERNS, message)
        if digits is None:
            digits = patterns.first_group(patterns.DEFAULT_ACCOUNT_PATTERNS, message)
        if digits is None or len(digits) < 4:
            return None
        return digits[-4:]

    def extract_balance(self, message: str) -> Optional[Decimal]:
        balance = patterns.first_amount(self.BALANCE_PATTERNS, message)
        if balance is None:
            balance = patterns.first_amount(patterns.DEFAULT_BALANCE_PATTERNS, message)
        return balance

    def extract_reference(self, message: str) -> Optional[str]:
        reference = patterns.first_group(self.REFERENCE_PATTERNS, message)
        if reference is None:
            reference = patterns.first_group(patterns.DEFAULT_REFERENCE_PATTERNS, message)
        return reference

    def extract_mode(self, message: str) -> Optional[str]:
        mode = patterns.first_label(patterns.DEFAULT_MODE_PATTERNS, message)
        if mode is None and patterns.UPI_ID_PATTERN.search(message):
            mode = "UPI"
        return mode

    def extract_upi_id(self, message: str) -> Optional[str]:
        match = patterns.UPI_ID_PATTERN.search(message)
        return match.group(1) if match else None

    def _apply_merchant_pattern(self, entry: MerchantPattern, message: str) -> Optional[str]:
        match = entry.regex.search(message)
        if not match:
            return None

        captured = match.group(1)
        if not entry.validate:
            return entry.label.format(captured.strip())

        name = self.merchant_extractor.clean(captured)
        if not self.merchant_extractor.is_valid(name):
            return None
        return entry.label.format(name)
