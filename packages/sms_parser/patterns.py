"""
Shared pattern library for bank SMS extraction.

Every semantic field has an ordered tuple of compiled patterns. Bank parsers
try their own tables first and fall back to the defaults below. Order inside
a table is significant: the most specific phrasing comes first and the first
hit wins.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, NamedTuple, Optional, Pattern, Sequence, Tuple

from .models import TransactionType

# Currency marker and numeric literal shared by all tables.
# The literal accepts western (1,000,000) and Indian (10,00,000) grouping.
CURRENCY = r"(?:Rs\.?|INR|₹)"
AMOUNT = r"(\d+(?:,\d{2,3})*(?:\.\d{1,2})?)"

# Terminators for free-text names (merchant, beneficiary).
NAME_END = r"(?=\s+on\b|\s+ref|\s+via\b|\s+avl|\s*[.,(;\n]|\s*$)"


class MerchantPattern(NamedTuple):
    """A merchant regex plus how to turn its capture into a name.

    ``label`` is a format string applied to the cleaned capture
    (e.g. ``"ATM - {}"``). With ``validate`` off the capture is used as-is.
    """

    regex: Pattern
    label: str = "{}"
    validate: bool = True


def compile_all(*patterns: str) -> Tuple[Pattern, ...]:
    """Compile patterns case-insensitively, preserving order."""
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def merchant(pattern: str, label: str = "{}", validate: bool = True) -> MerchantPattern:
    return MerchantPattern(re.compile(pattern, re.IGNORECASE), label, validate)


def keyword_table(*pairs: Tuple[str, object]) -> Tuple[Tuple[Pattern, object], ...]:
    """Compile (keyword, label) pairs into word-bounded, case-insensitive patterns."""
    return tuple(
        (re.compile(r"\b" + r"\s+".join(map(re.escape, keyword.split())) + r"\b", re.IGNORECASE),
         label)
        for keyword, label in pairs
    )


def to_decimal(raw) -> Optional[Decimal]:
    """Parse a finite decimal, or None."""
    if raw is None:
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def parse_amount(raw: str) -> Optional[Decimal]:
    """Parse a captured money literal; commas are stripped.

    Non-positive values count as "not found" so that a missing amount is
    never confused with a zero amount.
    """
    if raw is None:
        return None
    value = to_decimal(raw.replace(",", ""))
    if value is None or value <= 0:
        return None
    return value


def first_amount(patterns: Iterable[Pattern], text: str) -> Optional[Decimal]:
    """First pattern whose capture parses as an amount wins."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            value = parse_amount(match.group(1))
            if value is not None:
                return value
    return None


def first_group(patterns: Iterable[Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def first_label(table: Sequence[Tuple[Pattern, object]], text: str):
    """Return the label paired with the first matching pattern."""
    for pattern, label in table:
        if pattern.search(text):
            return label
    return None


def any_match(patterns: Iterable[Pattern], text: str) -> bool:
    return any(p.search(text) for p in patterns)


# ---------------------------------------------------------------------------
# Message classification
# ---------------------------------------------------------------------------

# OTP prompts, promotions, statement/due reminders and collect requests.
NON_TRANSACTION_PATTERNS = compile_all(
    r"\botp\b",
    r"one[\s-]time\s+password",
    r"verification\s+code",
    r"pre-?approved",
    r"congratulations",
    r"apply\s+now",
    r"limited\s+period",
    r"minimum\s+(?:amount\s+)?due",
    r"total\s+(?:amount\s+)?due",
    r"payment\s+(?:is\s+)?due",
    r"statement\s+(?:is\s+|has\s+been\s+)?(?:generated|ready)",
    r"has\s+requested",
    r"collect\s+request",
    r"payment\s+request",
)

TRANSACTION_KEYWORDS = compile_all(
    r"\b(?:debited|credited|withdrawn|transferred|spent|paid|received"
    r"|deposited|sent|deducted|purchase|withdrawal)\b",
    r"w/d@",
)


# ---------------------------------------------------------------------------
# Default field tables
# ---------------------------------------------------------------------------

_VERBS = r"(?:debited|credited|spent|paid|withdrawn|received|deposited|transferred|sent)"

DEFAULT_AMOUNT_PATTERNS = compile_all(
    # Rs 500 debited / INR 500 has been credited
    CURRENCY + r"\s*" + AMOUNT + r"\s+(?:has\s+been\s+|is\s+|was\s+)?" + _VERBS,
    # debited by Rs 500 / credited with 500
    _VERBS + r"\s+(?:by|with|for|of)?\s*" + CURRENCY + r"?\s*" + AMOUNT,
    # txn of Rs 500
    r"(?:txn|transaction|purchase|payment)\s+of\s+" + CURRENCY + r"\s*" + AMOUNT,
    # last resort: first currency-marked literal
    CURRENCY + r"\s*" + AMOUNT,
)

DEFAULT_TYPE_PATTERNS = (
    (re.compile(r"self\s+transfer|\bto\s+self\b|own\s+account", re.IGNORECASE),
     TransactionType.TRANSFER),
    (re.compile(r"\b(?:debited|withdrawn|spent|paid|sent|deducted|purchase|debit)\b",
                re.IGNORECASE),
     TransactionType.EXPENSE),
    (re.compile(r"\b(?:credited|received|deposited|refund(?:ed)?|cashback|credit)\b",
                re.IGNORECASE),
     TransactionType.INCOME),
)

DEFAULT_MERCHANT_PATTERNS = (
    merchant(r"\bto\s+VPA\s+([\w.-]+)@[\w.-]+"),
    merchant(r"\b(?:at|to)\s+([A-Za-z][A-Za-z0-9 &'*._-]*?)" + NAME_END),
    merchant(r"\bfrom\s+([A-Za-z][A-Za-z0-9 &'*._-]*?)" + NAME_END),
)

DEFAULT_ACCOUNT_PATTERNS = compile_all(
    r"\b(?:a/c|acct|account|ac)\s*(?:no\.?|number|num)?\s*[:.]?\s*"
    r"(?:ending\s+(?:with\s+|in\s+)?)?[x*]*(\d{4,})",
    r"\bcard\s*(?:no\.?)?\s*(?:ending\s+(?:with\s+|in\s+)?)?[x*]*(\d{4,})",
)

DEFAULT_BALANCE_PATTERNS = compile_all(
    r"(?:avl\.?\s*bal(?:ance)?|available\s+bal(?:ance)?|avail\.?\s*bal|a/c\s+bal(?:ance)?"
    r"|\bbal(?:ance)?)\s*(?:is|:|-)?\s*" + CURRENCY + r"\s*" + AMOUNT,
)

DEFAULT_REFERENCE_PATTERNS = compile_all(
    r"\bupi\s*(?:ref|txn|transaction)?\s*(?:no|id)?\.?\s*[:#-]?\s*(\d{6,})",
    r"\b(?:ref(?:erence)?\.?\s*(?:no|number|id)?\.?|refno|rrn|utr(?:\s*no)?"
    r"|txn\s*(?:id|no)|transaction\s+(?:id|ref(?:erence)?)(?:\s+no)?)"
    r"\s*[:#.-]?\s*(\w*\d\w*)",
)

# Payment rail, checked in order.
DEFAULT_MODE_PATTERNS = (
    (re.compile(r"\bupi\b|\bvpa\b", re.IGNORECASE), "UPI"),
    (re.compile(r"\b(?:debit|credit)\s+card\b|\bcard\s+(?:no\.?\s*)?[x*]+\d|\bpos\b",
                re.IGNORECASE), "CARD"),
    (re.compile(r"\batm\b|w/d@", re.IGNORECASE), "ATM"),
    (re.compile(r"\bneft\b", re.IGNORECASE), "NEFT"),
    (re.compile(r"\bimps\b", re.IGNORECASE), "IMPS"),
    (re.compile(r"\brtgs\b", re.IGNORECASE), "RTGS"),
)

# VPA handle; e-mail addresses (with a dotted domain) are skipped.
UPI_ID_PATTERN = re.compile(r"([\w.-]{2,}@[A-Za-z][A-Za-z0-9]+)(?![\w]|\.[A-Za-z])")
