"""Signature library: categorized literal strings indicative of malicious content."""

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from sigsentry.errors import LibraryError

SignatureLibrary = Mapping[str, tuple[str, ...]]


def freeze_library(patterns: Mapping[str, list[str] | tuple[str, ...]]) -> SignatureLibrary:
    """Build a read-only library, keeping category and pattern order.

    Args:
        patterns: Mapping of category name to pattern strings

    Returns:
        Immutable mapping of category to tuple of patterns

    Raises:
        LibraryError: If a category is not a sequence of non-empty strings
    """
    frozen: dict[str, tuple[str, ...]] = {}
    for category, items in patterns.items():
        if not isinstance(items, (list, tuple)) or not all(isinstance(p, str) for p in items):
            raise LibraryError(f"Category '{category}' must be a list of strings")
        # An empty pattern would match every file
        if any(not p for p in items):
            raise LibraryError(f"Category '{category}' contains an empty pattern")
        frozen[category] = tuple(items)
    return MappingProxyType(frozen)


DEFAULT_LIBRARY: SignatureLibrary = freeze_library(
    {
        "Remote Access": [
            "reverse shell",
            "bind shell",
            "nc -e /bin/sh",
            "nc -lvp",
            "/dev/tcp/",
            "meterpreter",
            "cobaltstrike",
            "beacon.dll",
        ],
        "Credential Theft": [
            "mimikatz",
            "sekurlsa::logonpasswords",
            "lsadump::sam",
            "procdump -ma lsass",
            "/etc/shadow",
            "keylogger",
            "GetAsyncKeyState",
        ],
        "Destructive Commands": [
            "rm -rf /",
            "rm -rf --no-preserve-root",
            "format c:",
            "del /f /s /q",
            "vssadmin delete shadows",
            "dd if=/dev/zero of=/dev/sda",
            ":(){ :|:& };:",
        ],
        "Persistence": [
            "HKEY_CURRENT_USER\\Software\\Microsoft\\Windows\\CurrentVersion\\Run",
            "HKLM\\Software\\Microsoft\\Windows\\CurrentVersion\\Run",
            "schtasks /create",
            "crontab -e",
            "C:\\Windows\\System32\\Tasks",
        ],
        "Suspicious Execution": [
            "powershell -enc",
            "powershell -nop -w hidden",
            "IEX(New-Object Net.WebClient)",
            "cmd.exe /c",
            "eval(base64_decode(",
            "os.system(",
            "subprocess.Popen(",
            "WScript.Shell",
            "CreateRemoteThread",
            "VirtualAllocEx",
        ],
        "Ransomware": [
            "Your files have been encrypted",
            "bitcoin wallet",
            ".onion",
            "decrypt your files",
        ],
        "Encoding/Decoding": [
            "AES",
            "DES",
            "RSA",
            "Base64",
        ],
    }
)


def load_library(path: Path) -> SignatureLibrary:
    """Load a signature library from a JSON file.

    The file must hold an object mapping each category to a list of
    pattern strings. Key order in the file is the scan order.

    Args:
        path: Path to JSON file

    Returns:
        Immutable signature library

    Raises:
        LibraryError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise LibraryError(f"Cannot load signature library {path}: {e}") from e

    if not isinstance(raw, dict):
        raise LibraryError(f"Signature library {path} must be a JSON object")

    return freeze_library(raw)
