"""Deterministic rules around the external summarizer.

The summarizer is probabilistic and tends to over-flag routine
cryptography. This module decides when it is called at all, what evidence
it sees, and when its answer is replaced with fixed wording:

    1. No findings: fixed message, summarizer not called
    2. Findings: evidence block passed to the summarizer
    3. Override guard: benign-crypto-only evidence with a summary lacking
       threat vocabulary is replaced with a fixed safe message
    4. Summarizer failure: synthesized fallback naming the finding count
"""

import logging

from sigsentry.scanner.results import DecodeOutcome, Finding
from sigsentry.signatures.vocabulary import (
    MALICIOUS_CONTEXT_PHRASES,
    THREAT_TERMS,
    contains_any,
    is_benign_token,
)
from sigsentry.summary.summarizers import Summarizer, TemplateSummarizer

logger = logging.getLogger(__name__)

NO_PATTERNS_DECODED = (
    "The analysis did not detect any known malicious code patterns in the decoded "
    "file content based on the current ruleset."
)
NO_SIGNIFICANT_THREATS = (
    "The analysis detected some common code patterns (like standard encryption) but "
    "found no indicators strongly suggesting malicious activity based on the current ruleset."
)
LIMITED_ANALYSIS_NOTE = (
    " (Note: File analysis may have been limited due to content processing issues.)"
)


def no_patterns_message(outcome: DecodeOutcome) -> str:
    """Fixed summary for a scan with no findings."""
    if outcome.decoded_successfully:
        return NO_PATTERNS_DECODED
    reason = outcome.decode_error or "Unknown reason"
    return (
        f"No known malicious patterns were detected in the raw file content "
        f"(Reason: {reason}). Base64 decoding failed, limiting the analysis."
    )


def build_evidence(findings: list[Finding], outcome: DecodeOutcome) -> str:
    """Format findings as the evidence block handed to the summarizer."""
    if outcome.decoded_successfully:
        scan_kind = "Decoded Content Scan"
    else:
        scan_kind = f"Raw Base64 Scan due to decode error: {outcome.decode_error}"

    lines = [f"Analysis Results ({len(findings)} patterns found - {scan_kind}):"]
    lines.extend(
        f'- Category: {f.category}, Detected Pattern: "{f.pattern}"' for f in findings
    )
    return "\n".join(lines)


def should_override(summary: str, findings: list[Finding], evidence: str) -> bool:
    """Check the three-part override condition.

    True only when the summary names no threat term, every finding is a
    standard cipher/encoding token, and the evidence has no malicious
    context phrase.
    """
    if contains_any(summary, THREAT_TERMS):
        return False
    if not findings or not all(is_benign_token(f.pattern) for f in findings):
        return False
    return not contains_any(evidence, MALICIOUS_CONTEXT_PHRASES)


def apply_override(
    summary: str,
    findings: list[Finding],
    evidence: str,
    outcome: DecodeOutcome,
) -> str:
    """Replace a summary that only dwells on benign cryptography."""
    if not should_override(summary, findings, evidence):
        return summary

    logger.warning(
        "Summary focused on standard encryption/encoding only; replacing with "
        "'no significant threats' message"
    )
    replacement = NO_SIGNIFICANT_THREATS
    if not outcome.decoded_successfully:
        replacement += LIMITED_ANALYSIS_NOTE
    return replacement


class SummaryPolicy:
    """Produces the final user-facing summary for a scan."""

    def __init__(self, summarizer: Summarizer | None = None) -> None:
        self.summarizer = summarizer if summarizer is not None else TemplateSummarizer()

    def summarize(self, findings: list[Finding], outcome: DecodeOutcome) -> str:
        """Build the summary for one file's findings.

        Args:
            findings: Findings from the signature matcher
            outcome: Decode outcome the findings were produced from

        Returns:
            Summary text; never raises on summarizer failure
        """
        if not findings:
            logger.debug("No patterns detected; using fixed summary")
            return no_patterns_message(outcome)

        evidence = build_evidence(findings, outcome)
        logger.info("Requesting summary for %d detected patterns", len(findings))
        try:
            summary = self.summarizer(evidence)
            if not summary or not summary.strip():
                raise ValueError("Summary generation returned no output.")
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.error("Failed to get summary: %s", reason)
            return (
                f"Potential threats detected ({len(findings)} patterns). "
                f"Failed to generate detailed summary. Reason: {reason}"
            )

        return apply_override(summary.strip(), findings, evidence, outcome)
