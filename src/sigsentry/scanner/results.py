"""Result data structures for content analysis."""

import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Finding:
    """A single signature match.

    Only presence is recorded; there is no offset or occurrence count.
    """

    pattern: str
    category: str

    @property
    def key(self) -> tuple[str, str]:
        """Composite key used to deduplicate findings within one scan."""
        return (self.category, self.pattern)

    def to_dict(self) -> dict:
        """Convert finding to dictionary."""
        return {"pattern": self.pattern, "category": self.category}


@dataclass
class DecodeOutcome:
    """Text view of an upload, ready for pattern matching."""

    text: str  # latin-1, one character per byte
    decoded_successfully: bool
    decode_error: str | None = None


def classify(findings: list[Finding]) -> bool:
    """Return the malicious verdict for a set of findings."""
    return len(findings) > 0


@dataclass
class AnalysisResult:
    """Complete result of analyzing a single uploaded file."""

    file_name: str
    findings: list[Finding] = field(default_factory=list)
    summary: str = ""
    error: str | None = None
    decoded_successfully: bool = False
    decode_error: str | None = None
    scan_time_ms: float = 0.0

    @property
    def is_malicious(self) -> bool:
        return classify(self.findings)

    @property
    def is_safe(self) -> bool:
        """Errored results are indeterminate and never reported as safe."""
        return self.error is None and not self.is_malicious

    def to_dict(self) -> dict:
        """Convert analysis result to dictionary."""
        return {
            "file_name": self.file_name,
            "is_malicious": self.is_malicious,
            "findings": [f.to_dict() for f in self.findings],
            "summary": self.summary,
            "error": self.error,
            "decoded_successfully": self.decoded_successfully,
            "decode_error": self.decode_error,
            "scan_time_ms": self.scan_time_ms,
        }

    def to_json(self) -> str:
        """Convert analysis result to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
