"""
SMS Parser

Bank SMS to structured transaction extraction.
"""

__version__ = "0.1.0"

from .models import ExtractedTransaction, TransactionType
from .base import BankParser
from .merchant import MerchantExtractor
from .registry import BankParserRegistry, build_default_registry
from .pipeline import ExtractionPipeline, parse_sms

__all__ = [
    "ExtractedTransaction",
    "TransactionType",
    "BankParser",
    "MerchantExtractor",
    "BankParserRegistry",
    "build_default_registry",
    "ExtractionPipeline",
    "parse_sms",
]
