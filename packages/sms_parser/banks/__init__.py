"""Bank-specific parsers, in registration (precedence) order."""

from .sbi import SBIBankParser
from .hdfc import HDFCBankParser
from .icici import ICICIBankParser
from .axis import AxisBankParser

BANK_PARSERS = {
    parser.KEY: parser
    for parser in (SBIBankParser, HDFCBankParser, ICICIBankParser, AxisBankParser)
}

__all__ = [
    "BANK_PARSERS",
    "SBIBankParser",
    "HDFCBankParser",
    "ICICIBankParser",
    "AxisBankParser",
]
