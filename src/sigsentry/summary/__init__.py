"""Summary generation and the deterministic override policy."""

from sigsentry.summary.policy import SummaryPolicy, apply_override, build_evidence
from sigsentry.summary.summarizers import (
    CommandSummarizer,
    Summarizer,
    TemplateSummarizer,
    build_prompt,
)

__all__ = [
    "SummaryPolicy",
    "apply_override",
    "build_evidence",
    "Summarizer",
    "TemplateSummarizer",
    "CommandSummarizer",
    "build_prompt",
]
