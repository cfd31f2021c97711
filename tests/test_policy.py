"""Tests for summary generation policy and the override guard."""

from conftest import RecordingSummarizer

from sigsentry.scanner.results import DecodeOutcome, Finding
from sigsentry.summary.policy import (
    LIMITED_ANALYSIS_NOTE,
    NO_PATTERNS_DECODED,
    NO_SIGNIFICANT_THREATS,
    SummaryPolicy,
    apply_override,
    build_evidence,
    should_override,
)
from sigsentry.summary.summarizers import TemplateSummarizer

DECODED = DecodeOutcome(text="", decoded_successfully=True)
RAW = DecodeOutcome(text="", decoded_successfully=False, decode_error="Incorrect padding")

CRYPTO_FINDINGS = [
    Finding(pattern="AES", category="Encoding/Decoding"),
    Finding(pattern="DES", category="Encoding/Decoding"),
]
THREAT_FINDINGS = [
    Finding(pattern="mimikatz", category="Credential Theft"),
    Finding(pattern="reverse shell", category="Remote Access"),
]


class TestNoFindings:
    """Test fixed summaries when nothing matched."""

    def test_decoded_message(self, summarizer):
        summary = SummaryPolicy(summarizer).summarize([], DECODED)

        assert summary == NO_PATTERNS_DECODED
        assert "decoded" in summary
        assert summarizer.calls == []

    def test_raw_fallback_message(self, summarizer):
        summary = SummaryPolicy(summarizer).summarize([], RAW)

        assert "raw file content" in summary
        assert "Incorrect padding" in summary
        assert "limiting the analysis" in summary
        assert summarizer.calls == []

    def test_failing_summarizer_not_called(self, failing_summarizer):
        SummaryPolicy(failing_summarizer).summarize([], DECODED)

        assert failing_summarizer.calls == 0


class TestBuildEvidence:
    """Test the evidence block format."""

    def test_decoded_block(self):
        evidence = build_evidence(THREAT_FINDINGS, DECODED)
        lines = evidence.splitlines()

        assert lines[0] == "Analysis Results (2 patterns found - Decoded Content Scan):"
        assert lines[1] == '- Category: Credential Theft, Detected Pattern: "mimikatz"'
        assert lines[2] == '- Category: Remote Access, Detected Pattern: "reverse shell"'

    def test_raw_block_mentions_decode_error(self):
        evidence = build_evidence(THREAT_FINDINGS[:1], RAW)

        assert "Raw Base64 Scan due to decode error: Incorrect padding" in evidence
        assert len(evidence.splitlines()) == 2


class TestFindingsSummary:
    """Test summarizer invocation when findings are present."""

    def test_summarizer_receives_evidence(self, summarizer):
        summary = SummaryPolicy(summarizer).summarize(THREAT_FINDINGS, DECODED)

        assert summary == "Potential malware activity detected."
        assert summarizer.calls == [build_evidence(THREAT_FINDINGS, DECODED)]

    def test_summary_whitespace_trimmed(self):
        summarizer = RecordingSummarizer("  Malware found.\n")

        assert SummaryPolicy(summarizer).summarize(THREAT_FINDINGS, DECODED) == "Malware found."

    def test_summarizer_failure_fallback(self, failing_summarizer):
        summary = SummaryPolicy(failing_summarizer).summarize(THREAT_FINDINGS, DECODED)

        assert summary == (
            "Potential threats detected (2 patterns). Failed to generate detailed "
            "summary. Reason: service unavailable"
        )

    def test_empty_summary_is_failure(self):
        summary = SummaryPolicy(RecordingSummarizer("")).summarize(THREAT_FINDINGS, DECODED)

        assert summary.startswith("Potential threats detected (2 patterns).")
        assert "returned no output" in summary

    def test_default_summarizer(self):
        policy = SummaryPolicy()

        assert isinstance(policy.summarizer, TemplateSummarizer)
        assert "Credential Theft" in policy.summarize(THREAT_FINDINGS, DECODED)


class TestOverrideGuard:
    """Test replacement of summaries that only dwell on standard crypto."""

    CRYPTO_SUMMARY = "The file uses the encryption algorithms AES and DES, which could hide data."

    def test_crypto_only_overridden(self):
        summarizer = RecordingSummarizer(self.CRYPTO_SUMMARY)

        summary = SummaryPolicy(summarizer).summarize(CRYPTO_FINDINGS, DECODED)

        assert summary == NO_SIGNIFICANT_THREATS
        assert len(summarizer.calls) == 1

    def test_crypto_only_raw_scan_adds_note(self):
        summarizer = RecordingSummarizer(self.CRYPTO_SUMMARY)

        summary = SummaryPolicy(summarizer).summarize(CRYPTO_FINDINGS, RAW)

        assert summary == NO_SIGNIFICANT_THREATS + LIMITED_ANALYSIS_NOTE

    def test_c2_context_not_overridden(self):
        findings = [
            Finding(pattern="AES", category="Crypto used to hide C2 traffic"),
            Finding(pattern="DES", category="Crypto used to hide C2 traffic"),
        ]
        summarizer = RecordingSummarizer(self.CRYPTO_SUMMARY)

        summary = SummaryPolicy(summarizer).summarize(findings, DECODED)

        assert summary == self.CRYPTO_SUMMARY

    def test_threat_vocabulary_not_overridden(self):
        reply = "AES is used as part of ransomware encrypting your documents."
        summary = SummaryPolicy(RecordingSummarizer(reply)).summarize(CRYPTO_FINDINGS, DECODED)

        assert summary == reply

    def test_mixed_findings_not_overridden(self):
        findings = CRYPTO_FINDINGS + THREAT_FINDINGS[:1]
        summary = SummaryPolicy(RecordingSummarizer(self.CRYPTO_SUMMARY)).summarize(
            findings, DECODED
        )

        assert summary == self.CRYPTO_SUMMARY

    def test_should_override_requires_findings(self):
        assert not should_override("Nothing to see.", [], "")

    def test_apply_override_passthrough(self):
        evidence = build_evidence(THREAT_FINDINGS, DECODED)
        text = "A reverse shell was found."

        assert apply_override(text, THREAT_FINDINGS, evidence, DECODED) == text

    def test_benign_token_match_is_case_insensitive(self):
        findings = [Finding(pattern="base64", category="Encoding/Decoding")]
        evidence = build_evidence(findings, DECODED)

        assert should_override("Base64 encoding is present.", findings, evidence)
