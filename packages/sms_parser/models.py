"""Transaction record produced by the extraction pipeline."""

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class TransactionType(str, Enum):
    """Direction of money movement."""

    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    TRANSFER = "TRANSFER"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str) -> Optional["TransactionType"]:
        """Case-insensitive lookup; returns None for unknown names."""
        if value is None:
            return None
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None


@dataclass(frozen=True)
class ExtractedTransaction:
    """Standardized transaction structure.

    Built once per message by the pipeline. Rule corrections go through
    ``with_updates`` and return a new instance.
    """

    amount: Decimal
    transaction_type: TransactionType
    bank_name: str
    source_text: str
    source_sender: str
    timestamp: int  # epoch ms
    merchant: Optional[str] = None
    account_last4: Optional[str] = None
    balance_after: Optional[Decimal] = None
    reference_id: Optional[str] = None
    mode: Optional[str] = None  # UPI, NEFT, IMPS, RTGS, ATM, CARD
    upi_id: Optional[str] = None
    category: Optional[str] = None
    narration: Optional[str] = None

    def with_updates(self, **changes: Any) -> "ExtractedTransaction":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary for persistence."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, TransactionType):
                value = value.value
            out[f.name] = value
        return out
