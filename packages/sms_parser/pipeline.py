"""
Extraction pipeline: sender -> parser -> validity filter -> transaction.

Never raises for malformed input. Every reason for not producing a
transaction (unknown sender, non-transactional text, no amount) is
signalled by returning None.
"""

from typing import Optional

import structlog

from .base import BankParser
from .models import ExtractedTransaction, TransactionType
from .registry import BankParserRegistry, build_default_registry

logger = structlog.get_logger()


class ExtractionPipeline:
    """Turns one SMS into an ExtractedTransaction, or None."""

    def __init__(self, registry: BankParserRegistry):
        self.registry = registry

    def extract(self, sender: str, text: str, timestamp: int) -> Optional[ExtractedTransaction]:
        if not sender or not sender.strip() or not text or not text.strip():
            return None

        parser = self.registry.resolve(sender)
        if parser is None:
            logger.debug("sender_unresolved", sender=sender)
            return None

        try:
            return self._extract_with(parser, sender, text, timestamp)
        except Exception as e:
            logger.warning(
                "sms_parse_failed", sender=sender, bank=parser.BANK_NAME, error=str(e)
            )
            return None

    def _extract_with(
        self, parser: BankParser, sender: str, text: str, timestamp: int
    ) -> Optional[ExtractedTransaction]:
        if not parser.is_transaction_message(text):
            logger.debug("message_not_transactional", bank=parser.BANK_NAME)
            return None

        amount = parser.extract_amount(text)
        if amount is None:
            logger.debug("amount_not_found", bank=parser.BANK_NAME)
            return None

        transaction = ExtractedTransaction(
            amount=amount,
            transaction_type=parser.extract_transaction_type(text) or TransactionType.UNKNOWN,
            bank_name=parser.BANK_NAME,
            source_text=text,
            source_sender=sender,
            timestamp=timestamp,
            merchant=parser.extract_merchant(text, sender),
            account_last4=parser.extract_account_last4(text),
            balance_after=parser.extract_balance(text),
            reference_id=parser.extract_reference(text),
            mode=parser.extract_mode(text),
            upi_id=parser.extract_upi_id(text),
        )
        logger.debug(
            "transaction_extracted",
            bank=parser.BANK_NAME,
            type=transaction.transaction_type.value,
        )
        return transaction


def parse_sms(
    sender: str,
    text: str,
    timestamp: int,
    registry: Optional[BankParserRegistry] = None,
) -> Optional[ExtractedTransaction]:
    """
    Convenience function to parse a single SMS.

    Args:
        sender: Raw sender id (e.g. "AX-SBIBK-S")
        text: Message body
        timestamp: Receive time in epoch milliseconds
        registry: Parser registry; the default registry is built if omitted

    Returns:
        ExtractedTransaction, or None if the message is not a parseable
        transaction
    """
    if registry is None:
        registry = build_default_registry()
    return ExtractionPipeline(registry).extract(sender, text, timestamp)
