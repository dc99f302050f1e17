"""Unit tests for semresolver.core.repository."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from semresolver.core.repository import (
    DependencyRepository,
    InMemoryRepository,
    VersionRepository,
)
from semresolver.exceptions import (
    FileOperationError,
    LibraryNotFoundError,
    RepositoryFormatError,
)

SAMPLE = {
    "test1": {"0.1.0": {}, "0.1.1": {}},
    "test2": {"0.1.0": {"test1": "^0.1.0"}},
}


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository(SAMPLE)


@pytest.mark.unit
class TestInMemoryRepository:
    """Lookups against an in-memory repository."""

    def test_implements_both_protocols(self, repository: InMemoryRepository) -> None:
        """The repository is accepted as either collaborator."""
        assert isinstance(repository, VersionRepository)
        assert isinstance(repository, DependencyRepository)

    def test_get_versions(self, repository: InMemoryRepository) -> None:
        """Every version key is returned."""
        assert repository.get_versions("test1") == ["0.1.0", "0.1.1"]

    def test_get_dependencies(self, repository: InMemoryRepository) -> None:
        """The dependency map of one version is returned."""
        assert repository.get_dependencies("test2", "0.1.0") == {"test1": "^0.1.0"}
        assert repository.get_dependencies("test1", "0.1.1") == {}

    def test_unknown_library(self, repository: InMemoryRepository) -> None:
        """Unknown libraries raise LibraryNotFoundError."""
        with pytest.raises(LibraryNotFoundError) as exc_info:
            repository.get_versions("nope")

        assert exc_info.value.message == "No such library: nope"

    def test_unknown_version(self, repository: InMemoryRepository) -> None:
        """Unknown versions of a known library also raise."""
        with pytest.raises(LibraryNotFoundError) as exc_info:
            repository.get_dependencies("test1", "9.9.9")

        assert exc_info.value.library == "test1"
        assert exc_info.value.version == "9.9.9"
        assert exc_info.value.details == {"version": "9.9.9"}

    def test_lookups_return_copies(self, repository: InMemoryRepository) -> None:
        """Mutating a result does not touch the repository."""
        repository.get_dependencies("test2", "0.1.0")["test9"] = "*"
        repository.get_versions("test1").append("9.9.9")

        assert repository.get_dependencies("test2", "0.1.0") == {"test1": "^0.1.0"}
        assert repository.get_versions("test1") == ["0.1.0", "0.1.1"]

    def test_input_is_copied(self) -> None:
        """Later changes to the source mapping are not observed."""
        data = {"a": {"1.0.0": {}}}
        repository = InMemoryRepository(data)
        data["a"]["2.0.0"] = {}

        assert repository.get_versions("a") == ["1.0.0"]

    def test_container_protocol(self, repository: InMemoryRepository) -> None:
        """``in`` and ``len`` reflect known libraries."""
        assert "test1" in repository
        assert "test3" not in repository
        assert len(repository) == 2


@pytest.mark.unit
class TestFromMapping:
    """Validation of untrusted repository documents."""

    def test_valid_document(self) -> None:
        """A well-formed document loads."""
        repository = InMemoryRepository.from_mapping(SAMPLE)

        assert len(repository) == 2

    @pytest.mark.parametrize(
        "document, fragment",
        [
            (["test1"], "must be an object of libraries"),
            ({"test1": ["0.1.0"]}, "Versions of 'test1'"),
            ({"test1": {"0.1.0": "test2"}}, "Dependencies of test1@0.1.0"),
            ({"test1": {"0.1.0": {"test2": 1}}}, "Range of 'test2'"),
        ],
    )
    def test_malformed_document(self, document, fragment: str) -> None:
        """Each shape violation is reported with its location."""
        with pytest.raises(RepositoryFormatError) as exc_info:
            InMemoryRepository.from_mapping(document, source="repo.json")

        assert fragment in exc_info.value.message
        assert exc_info.value.source == "repo.json"


@pytest.mark.unit
class TestFromFile:
    """Loading repositories from JSON files."""

    def test_load(self, tmp_path: Path) -> None:
        """A JSON file on disk is loaded."""
        path = tmp_path / "repository.json"
        path.write_text(json.dumps(SAMPLE), encoding="utf-8")

        repository = InMemoryRepository.from_file(path)

        assert repository.get_dependencies("test2", "0.1.0") == {"test1": "^0.1.0"}

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON raises RepositoryFormatError naming the file."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(RepositoryFormatError) as exc_info:
            InMemoryRepository.from_file(path)

        assert exc_info.value.message.startswith("Invalid JSON in broken.json")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file surfaces as FileOperationError."""
        with pytest.raises(FileOperationError):
            InMemoryRepository.from_file(tmp_path / "missing.json")

    def test_bundled_fixtures_load(self, repositories_dir: Path) -> None:
        """Every bundled repository fixture is well-formed."""
        paths = sorted(repositories_dir.glob("*.json"))

        assert paths
        for path in paths:
            assert len(InMemoryRepository.from_file(path)) > 0
