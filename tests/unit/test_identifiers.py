"""Unit tests for domain value objects - identifiers."""

from __future__ import annotations

from pathlib import Path

import pytest

from localdb.domain.errors import InvalidDatabaseNameError
from localdb.domain.value_objects import (
    MAX_NAME_LENGTH,
    DatabaseFiles,
    DatabaseName,
)


class TestDatabaseName:
    """Tests for DatabaseName."""

    @pytest.mark.parametrize("name", ["acct_test", "TestDB2", "_scratch", "a", "x" * MAX_NAME_LENGTH])
    def test_valid_names(self, name: str) -> None:
        """Letters, digits and underscores are accepted."""
        assert DatabaseName(name).value == name

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "2fast",
            "has space",
            "semi;colon",
            "quote'd",
            "bracket]",
            "drop table x--",
            "dash-name",
            "x" * (MAX_NAME_LENGTH + 1),
        ],
    )
    def test_invalid_names(self, name: str) -> None:
        """Anything outside the allow-list is rejected."""
        with pytest.raises(InvalidDatabaseNameError):
            DatabaseName(name)

    def test_invalid_name_is_value_error(self) -> None:
        """InvalidDatabaseNameError can be caught as ValueError."""
        with pytest.raises(ValueError):
            DatabaseName("not valid")

    def test_non_string_rejected(self) -> None:
        with pytest.raises(InvalidDatabaseNameError, match="must be str"):
            DatabaseName(42)  # type: ignore[arg-type]

    def test_quoted_and_log_name(self) -> None:
        name = DatabaseName("acct_test")
        assert name.quoted == "[acct_test]"
        assert name.log_name == "acct_test_log"
        assert str(name) == "acct_test"

    def test_immutable(self) -> None:
        name = DatabaseName("acct_test")
        with pytest.raises(AttributeError):
            name.value = "other"  # type: ignore[misc]


class TestDatabaseFiles:
    """Tests for DatabaseFiles."""

    def test_layout(self, temp_dir: Path) -> None:
        """Data and log files sit side by side under the base path."""
        files = DatabaseFiles.for_database("Mike", temp_dir)
        assert files.data_file == temp_dir / "Mike.mdf"
        assert files.log_file == temp_dir / "Mike_log.ldf"
        assert files.base_path == temp_dir

    def test_accepts_database_name(self, temp_dir: Path) -> None:
        files = DatabaseFiles.for_database(DatabaseName("Mike"), str(temp_dir))
        assert files.data_file.name == "Mike.mdf"

    def test_exists_checks_data_file_only(self, temp_dir: Path) -> None:
        """Existence follows the data file; the log file is ignored."""
        files = DatabaseFiles.for_database("only_log", temp_dir)
        files.log_file.write_bytes(b"")
        assert not files.exists()

        files.data_file.write_bytes(b"")
        files.log_file.unlink()
        assert files.exists()
