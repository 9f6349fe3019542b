"""Sender resolution: maps an SMS sender id to the parser for its bank."""

import threading
from typing import Iterable, Optional, Tuple

import structlog

from packages.core.errors import ConfigurationError

from .banks import BANK_PARSERS
from .base import BankParser
from .merchant import MerchantExtractor

logger = structlog.get_logger()


class BankParserRegistry:
    """Ordered list of parsers; the first parser that accepts a sender wins.

    Insertion order is precedence. Reads work on an immutable snapshot, so
    ``resolve`` needs no locking; ``register`` swaps the snapshot under a lock.
    """

    def __init__(self, parsers: Iterable[BankParser] = ()):
        self._parsers: Tuple[BankParser, ...] = tuple(parsers)
        self._lock = threading.Lock()

    @property
    def parsers(self) -> Tuple[BankParser, ...]:
        return self._parsers

    def register(self, parser: BankParser) -> None:
        with self._lock:
            self._parsers = self._parsers + (parser,)
        logger.info("parser_registered", bank=parser.BANK_NAME, position=len(self._parsers))

    def resolve(self, sender: str) -> Optional[BankParser]:
        if not sender:
            return None

        for parser in self._parsers:
            if parser.can_handle(sender):
                return parser
        return None

    def get(self, key: str) -> Optional[BankParser]:
        """Look up a registered parser by its bank key (e.g. ``"sbi"``)."""
        for parser in self._parsers:
            if parser.KEY == key.lower():
                return parser
        return None

    def __len__(self) -> int:
        return len(self._parsers)


def build_default_registry(settings=None) -> BankParserRegistry:
    """Composition root for the parser registry.

    Registration order follows ``BANK_PARSERS`` regardless of the order in
    ``settings.ENABLED_BANKS``.

    Raises:
        ConfigurationError: if ENABLED_BANKS names an unknown bank.
    """
    enabled = settings.enabled_banks if settings is not None else []
    unknown = [key for key in enabled if key not in BANK_PARSERS]
    if unknown:
        raise ConfigurationError(
            f"Unknown bank key(s) in ENABLED_BANKS: {', '.join(unknown)}. "
            f"Available: {', '.join(BANK_PARSERS)}"
        )

    merchant_extractor = MerchantExtractor()
    parsers = [
        parser_cls(merchant_extractor)
        for key, parser_cls in BANK_PARSERS.items()
        if not enabled or key in enabled
    ]
    logger.debug("registry_built", banks=[p.KEY for p in parsers])
    return BankParserRegistry(parsers)
