from __future__ import annotations

from pathlib import Path

import pytest

from semresolver.exceptions import FileOperationError
from semresolver.utils.filesystem import safe_read_file


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_text(self, tmp_path: Path) -> None:
        """File contents are returned as text."""
        path = tmp_path / "repo.json"
        path.write_text('{"a": {}}', encoding="utf-8")

        assert safe_read_file(path) == '{"a": {}}'

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        """Plain string paths work too."""
        path = tmp_path / "repo.json"
        path.write_text("x", encoding="utf-8")

        assert safe_read_file(str(path)) == "x"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise with operation details."""
        path = tmp_path / "nope.json"

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(path)

        assert exc_info.value.message == f"File not found: {path}"
        assert exc_info.value.operation == "read"

    def test_directory(self, tmp_path: Path) -> None:
        """Directories are rejected."""
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(tmp_path)

        assert exc_info.value.message.startswith("Not a file:")

    def test_size_limit(self, tmp_path: Path) -> None:
        """Files above ``max_size`` are rejected."""
        path = tmp_path / "big.json"
        path.write_text("x" * 20, encoding="utf-8")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(path, max_size=10)

        assert "File too large: 20 bytes (max 10)" == exc_info.value.message

    def test_size_limit_disabled(self, tmp_path: Path) -> None:
        """``max_size=None`` disables the check."""
        path = tmp_path / "big.json"
        path.write_text("x" * 20, encoding="utf-8")

        assert len(safe_read_file(path, max_size=None)) == 20

    def test_decode_error(self, tmp_path: Path) -> None:
        """Undecodable bytes are wrapped with the original error."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(path)

        assert exc_info.value.message.startswith("Failed to read file:")
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
