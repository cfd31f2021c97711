"""Signature library and vocabularies for detection."""

from sigsentry.signatures.library import (
    DEFAULT_LIBRARY,
    SignatureLibrary,
    freeze_library,
    load_library,
)
from sigsentry.signatures.vocabulary import (
    BENIGN_CRYPTO_TOKENS,
    MALICIOUS_CONTEXT_PHRASES,
    THREAT_TERMS,
)

__all__ = [
    "DEFAULT_LIBRARY",
    "SignatureLibrary",
    "freeze_library",
    "load_library",
    "THREAT_TERMS",
    "BENIGN_CRYPTO_TOKENS",
    "MALICIOUS_CONTEXT_PHRASES",
]
