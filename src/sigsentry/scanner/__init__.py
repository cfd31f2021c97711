"""Content scanning stages.

    Decoder - data URI / base64 payload to a byte-preserving text view
    SignatureMatcher - literal, case-insensitive signature matching
    ResultClassifier - malicious verdict from findings

The full pipeline lives in sigsentry.scanner.engine.
"""

from sigsentry.scanner.decoder import decode_content
from sigsentry.scanner.matcher import MAX_CONTENT_LENGTH_FOR_SCAN, find_malicious_patterns
from sigsentry.scanner.results import AnalysisResult, DecodeOutcome, Finding, classify

__all__ = [
    "decode_content",
    "find_malicious_patterns",
    "MAX_CONTENT_LENGTH_FOR_SCAN",
    "classify",
    "AnalysisResult",
    "DecodeOutcome",
    "Finding",
]
