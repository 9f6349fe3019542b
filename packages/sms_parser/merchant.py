import re
from typing import Optional


class MerchantExtractor:
    def __init__(self):
        # Ordered list of known merchants (order matters for substring matching)
        self.known_merchants = [
            ("Swiggy Instamart", ["swiggy instamart", "instamart"]),
            ("Swiggy", ["swiggy"]),
            ("Zomato", ["zomato"]),
            ("Uber", ["uber"]),
            ("Ola", ["olacabs", "ola cabs"]),
            ("Rapido", ["rapido"]),
            ("Blinkit", ["blinkit", "grofers"]),
            ("Zepto", ["zepto"]),
            ("BigBasket", ["bigbasket", "big basket"]),
            ("Amazon", ["amazon", "amzn"]),
            ("Flipkart", ["flipkart"]),
            ("Myntra", ["myntra"]),
            ("Netflix", ["netflix"]),
            ("Spotify", ["spotify"]),
            ("Airtel", ["airtel"]),
            ("Jio", ["reliance jio", "jio"]),
            ("IRCTC", ["irctc"]),
        ]

        # Trailing fragments that follow a name in SMS text
        self.trailing_noise = [
            r"\s+(?:on|ref|refno|txn|via|dated|avl|upi)\b.*$",
            r"\s+\d{1,2}[-/]\w{2,3}[-/]\d{2,4}.*$",  # dates
            r"[\s.,;:()*-]+$",
        ]

        self.leading_noise = [
            r"^(?:vpa|m/s\.?|mr\.?|ms\.?)\s+",
        ]

        # Fragments that look like names but are message boilerplate
        self.boilerplate = {
            "your", "you", "a/c", "ac", "acct", "account", "card", "bank",
            "self", "upi", "ref", "the", "customer", "dear customer", "beneficiary",
            "self transfer", "mobile",
        }

    def clean(self, name: Optional[str]) -> str:
        if not name:
            return ""

        cleaned = name.strip()
        for pattern in self.leading_noise:
            cleaned = re.sub(pattern, "", cleaned, flags=re.IGNORECASE)
        for pattern in self.trailing_noise:
            cleaned = re.sub(pattern, "", cleaned, flags=re.IGNORECASE)

        # Compress whitespace
        return re.sub(r"\s+", " ", cleaned).strip()

    def is_valid(self, name: Optional[str]) -> bool:
        if not name or len(name) < 2:
            return False

        # Purely numeric fragments are account numbers or references
        if re.fullmatch(r"[\d\s.,/-]+", name):
            return False
        if not re.search(r"[A-Za-z]", name):
            return False
        # "mobile 9876543210" and similar carry more digits than letters
        if sum(c.isdigit() for c in name) > sum(c.isalpha() for c in name):
            return False

        lowered = name.lower()
        if lowered in self.boilerplate:
            return False
        if re.match(r"(?:your|a/c|account|card|mobile)\b", lowered):
            return False
        return True

    def match_known(self, text: Optional[str]) -> Optional[str]:
        """Return the official name of the first known merchant in text."""
        if not text:
            return None

        lowered = text.lower()
        for official_name, aliases in self.known_merchants:
            for alias in aliases:
                # word boundary check for short aliases to avoid false positives
                if len(alias) <= 4:
                    if re.search(r"\b" + re.escape(alias) + r"\b", lowered):
                        return official_name
                elif alias in lowered:
                    return official_name
        return None
