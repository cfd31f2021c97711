"""Summarizer collaborators that turn an evidence block into prose.

A summarizer is any callable taking the evidence text and returning a
summary string. It may raise; the summary policy recovers from failures.

    - TemplateSummarizer: offline, deterministic wording
    - CommandSummarizer: pipes an analyst prompt into an external command
      (for example a local LLM runner) and returns its stdout
"""

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Protocol

from sigsentry.errors import SummarizerError

logger = logging.getLogger(__name__)

ANALYST_PROMPT = """\
You are a cybersecurity analyst reviewing file scan results. Summarize the findings for a non-technical user.

Critical instructions:

1. Focus on high-confidence threats. Prioritize patterns strongly indicative of malicious behavior \
(reverse shells, known malware commands like 'mimikatz', suspicious network connections, \
persistence mechanisms such as startup entries, destructive commands like 'rm -rf /').
2. Ignore standard encryption and encoding unless the context is suspicious. Do not flag AES, DES, \
RSA or Base64 as malicious on their own. Only mention them if the results say they are used to \
obfuscate known malware, hide C2 communication, or are part of ransomware behavior.
3. If the results mention limitations such as a raw Base64 scan or failed decoding, include a brief caveat.
4. If the only detected patterns are standard encryption/encoding or other low-confidence findings, \
clearly state that no significant threats were detected.
5. Be concise and avoid technical jargon.

Analysis results provided:
{evidence}

Summary for user:
"""


class Summarizer(Protocol):
    """Callable contract for the external summarizer."""

    def __call__(self, evidence: str) -> str: ...


def build_prompt(evidence: str) -> str:
    """Wrap an evidence block in the analyst instructions."""
    return ANALYST_PROMPT.format(evidence=evidence)


class BaseSummarizer(ABC):
    """Base class for bundled summarizers."""

    name: str = "base"

    @abstractmethod
    def summarize(self, evidence: str) -> str:
        """Produce a summary for the evidence block."""

    def __call__(self, evidence: str) -> str:
        return self.summarize(evidence)


class TemplateSummarizer(BaseSummarizer):
    """Deterministic summarizer that needs no external service."""

    name = "template"

    def summarize(self, evidence: str) -> str:
        categories: list[str] = []
        count = 0
        for line in evidence.splitlines():
            if not line.startswith("- Category: "):
                continue
            count += 1
            category = line[len("- Category: ") :].split(", Detected Pattern:", 1)[0]
            if category not in categories:
                categories.append(category)

        if not count:
            return "No detected patterns were listed in the analysis results."

        noun = "pattern" if count == 1 else "patterns"
        return (
            f"The scan matched {count} known {noun} in the categories: "
            f"{', '.join(categories)}. Review the listed patterns before opening this file."
        )


class CommandSummarizer(BaseSummarizer):
    """Summarizer backed by an external command.

    The prompt is written to the command's stdin and its stdout is the
    summary. Missing tools, non-zero exits and timeouts raise
    SummarizerError.
    """

    name = "command"

    def __init__(self, command: str | list[str], timeout: float | None = None) -> None:
        self.argv = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.argv:
            raise ValueError("Summarizer command must not be empty")
        self.timeout = timeout

    @property
    def tool_available(self) -> bool:
        """Check if the command's executable is installed."""
        return shutil.which(self.argv[0]) is not None

    def summarize(self, evidence: str) -> str:
        if not self.tool_available:
            raise SummarizerError(f"Summarizer command '{self.argv[0]}' not found")

        logger.info("Calling external summarizer: %s", self.argv[0])
        try:
            result = subprocess.run(
                self.argv,
                input=build_prompt(evidence),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SummarizerError(f"Summarizer timed out after {e.timeout}s") from e
        except OSError as e:
            raise SummarizerError(f"Summarizer could not be started: {e}") from e

        if result.returncode != 0:
            raise SummarizerError(
                f"Summarizer exited with code {result.returncode}: {result.stderr.strip()[:200]}"
            )

        return result.stdout.strip()
