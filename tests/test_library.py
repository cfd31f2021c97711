"""Tests for signature library loading."""

import json

import pytest

from sigsentry.errors import LibraryError
from sigsentry.signatures.library import DEFAULT_LIBRARY, freeze_library, load_library


class TestSignatureLibrary:
    """Test library construction and loading."""

    def test_default_library_has_crypto_category(self):
        assert DEFAULT_LIBRARY["Encoding/Decoding"] == ("AES", "DES", "RSA", "Base64")

    def test_frozen_library_is_read_only(self):
        library = freeze_library({"Tools": ["mimikatz"]})

        with pytest.raises(TypeError):
            library["Tools"] = ("other",)
        assert library["Tools"] == ("mimikatz",)

    def test_load_keeps_order(self, tmp_path):
        filepath = tmp_path / "rules.json"
        filepath.write_text(json.dumps({"Zeta": ["z1", "z0"], "Alpha": ["a"]}))

        library = load_library(filepath)

        assert list(library) == ["Zeta", "Alpha"]
        assert library["Zeta"] == ("z1", "z0")

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            json.dumps(["mimikatz"]),
            json.dumps({"Tools": "mimikatz"}),
            json.dumps({"Tools": ["mimikatz", 3]}),
            json.dumps({"Tools": [""]}),
        ],
    )
    def test_invalid_files(self, tmp_path, content):
        filepath = tmp_path / "rules.json"
        filepath.write_text(content)

        with pytest.raises(LibraryError):
            load_library(filepath)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryError):
            load_library(tmp_path / "missing.json")

    @pytest.mark.parametrize(
        "patterns",
        [
            {"Tools": [""]},
            {"Tools": ["mimikatz", None]},
            {"Tools": "mimikatz"},
        ],
    )
    def test_freeze_rejects_invalid_patterns(self, patterns):
        with pytest.raises(LibraryError):
            freeze_library(patterns)
