"""JSON output for analysis results."""

import json
import sys
from typing import TextIO

from sigsentry.scanner.results import AnalysisResult


def output_json(
    results: list[AnalysisResult],
    file: TextIO = sys.stdout,
    indent: int = 2,
) -> None:
    """Output analysis results as JSON.

    Args:
        results: List of analysis results
        file: Output file (default: stdout)
        indent: JSON indentation level
    """
    json.dump(_build_document(results), file, indent=indent)
    file.write("\n")


def _build_document(results: list[AnalysisResult]) -> dict:
    return {
        "results": [r.to_dict() for r in results],
        "summary": _generate_summary(results),
    }


def _generate_summary(results: list[AnalysisResult]) -> dict:
    """Generate summary statistics for results.

    Args:
        results: List of analysis results

    Returns:
        Summary dictionary
    """
    category_counts: dict[str, int] = {}
    for result in results:
        for finding in result.findings:
            category_counts[finding.category] = category_counts.get(finding.category, 0) + 1

    return {
        "total_files": len(results),
        "malicious_files": sum(1 for r in results if r.is_malicious),
        "failed_files": sum(1 for r in results if r.error),
        "raw_fallback_scans": sum(
            1 for r in results if not r.error and not r.decoded_successfully
        ),
        "findings_by_category": category_counts,
    }
