"""Literal signature matching over decoded content."""

import logging
import re

from sigsentry.scanner.results import Finding
from sigsentry.signatures.library import SignatureLibrary

logger = logging.getLogger(__name__)

# Above this size the substring fallback for broken patterns is skipped
MAX_CONTENT_LENGTH_FOR_SCAN = 50 * 1024 * 1024


def compile_literal(pattern: str) -> re.Pattern:
    """Compile a pattern as an exact, case-insensitive substring match."""
    return re.compile(re.escape(pattern), re.IGNORECASE)


def find_malicious_patterns(content: str, library: SignatureLibrary) -> list[Finding]:
    """Scan content against every pattern of the signature library.

    Categories and patterns are visited in declared order, which is the
    order of the returned findings. Each (category, pattern) pair is
    reported at most once. The whole library is always scanned.

    Args:
        content: Decoded (or raw fallback) text
        library: Signature library to match against

    Returns:
        List of findings in library order
    """
    findings: list[Finding] = []
    seen: set[tuple[str, str]] = set()
    is_large_content = len(content) > MAX_CONTENT_LENGTH_FOR_SCAN
    lowered: str | None = None

    if is_large_content:
        logger.warning(
            "Content length (%d) exceeds %d bytes. Scan performance might be impacted.",
            len(content),
            MAX_CONTENT_LENGTH_FOR_SCAN,
        )

    for category, patterns in library.items():
        for pattern in patterns:
            key = (category, pattern)
            if key in seen:
                continue

            try:
                matched = compile_literal(pattern).search(content) is not None
            except re.error as e:
                logger.error("Error creating regex for pattern %r: %s", pattern, e)
                if is_large_content:
                    logger.warning(
                        "Skipping substring fallback for large content and pattern %r",
                        pattern,
                    )
                    continue
                if lowered is None:
                    lowered = content.lower()
                matched = pattern.lower() in lowered

            if matched:
                findings.append(Finding(pattern=pattern, category=category))
                seen.add(key)

    if findings:
        logger.info("Scan complete. Found %d distinct potential patterns.", len(findings))
    else:
        logger.info("Scan complete. No known malicious patterns detected.")

    return findings
