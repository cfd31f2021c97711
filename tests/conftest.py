"""Pytest fixtures for sigsentry tests."""

import base64

import pytest

from sigsentry.signatures.library import freeze_library


def encode(text: str | bytes, header: str | None = "data:text/plain;base64") -> str:
    """Wrap content the way the upload layer does."""
    data = text.encode("latin-1") if isinstance(text, str) else text
    payload = base64.b64encode(data).decode("ascii")
    return f"{header},{payload}" if header else payload


class RecordingSummarizer:
    """Summarizer double returning a canned reply and recording its inputs."""

    def __init__(self, reply: str = "Potential malware activity detected.") -> None:
        self.reply = reply
        self.calls: list[str] = []

    def __call__(self, evidence: str) -> str:
        self.calls.append(evidence)
        return self.reply


class FailingSummarizer:
    """Summarizer double that always raises."""

    def __init__(self, message: str = "service unavailable") -> None:
        self.message = message
        self.calls = 0

    def __call__(self, evidence: str) -> str:
        self.calls += 1
        raise RuntimeError(self.message)


@pytest.fixture
def sample_library():
    """Small library with threat and benign crypto categories."""
    return freeze_library(
        {
            "Remote Access": ["reverse shell", "nc -e /bin/sh"],
            "Credential Theft": ["mimikatz", "sekurlsa::logonpasswords"],
            "Encoding/Decoding": ["AES", "DES"],
        }
    )


@pytest.fixture
def crypto_library():
    """Library holding only standard cipher names."""
    return freeze_library({"Encoding/Decoding": ["AES", "DES"]})


@pytest.fixture
def summarizer():
    return RecordingSummarizer()


@pytest.fixture
def failing_summarizer():
    return FailingSummarizer()
