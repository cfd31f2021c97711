"""Fixed vocabularies used by the summary override guard."""

# Terms that mark a summary as describing a real threat
THREAT_TERMS: tuple[str, ...] = (
    "reverse shell",
    "malicious command",
    "suspicious network",
    "persistence",
    "destructive",
    "malware",
    "threat",
    "exploit",
    "credential dumping",
    "keylogger",
    "ransomware",
)

# Standard cipher and encoding names that are routine in legitimate software
BENIGN_CRYPTO_TOKENS: frozenset[str] = frozenset(
    {
        "aes",
        "des",
        "3des",
        "rsa",
        "base64",
    }
)

# Phrases in the evidence that put crypto tokens in a malicious light
MALICIOUS_CONTEXT_PHRASES: tuple[str, ...] = (
    "malicious use",
    "obfuscate",
    "hide c2",
    "ransomware behavior",
)


def contains_any(text: str, terms: tuple[str, ...]) -> bool:
    """Case-insensitive check for any of the terms in text."""
    lowered = text.lower()
    return any(term in lowered for term in terms)


def is_benign_token(pattern: str) -> bool:
    """Check whether a detected pattern is a standard cipher/encoding name."""
    return pattern.strip().lower() in BENIGN_CRYPTO_TOKENS
