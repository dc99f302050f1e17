from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Callable, Dict, List, Mapping

import pytest

from semresolver.core.repository import InMemoryRepository
from semresolver.utils.version_utils import satisfies

REPOSITORIES_DIR = Path(__file__).parent / "repositories"


class CountingRepository:
    """Wraps a repository and counts every collaborator call."""

    def __init__(self, inner: InMemoryRepository) -> None:
        self.inner = inner
        self.version_calls: Counter = Counter()
        self.dependency_calls: Counter = Counter()

    def get_versions(self, library: str) -> List[str]:
        self.version_calls[library] += 1
        return self.inner.get_versions(library)

    def get_dependencies(self, library: str, version: str) -> Dict[str, str]:
        self.dependency_calls[(library, version)] += 1
        return self.inner.get_dependencies(library, version)


@pytest.fixture
def repositories_dir() -> Path:
    """Directory holding the JSON repository fixtures."""
    return REPOSITORIES_DIR


@pytest.fixture
def load_repository() -> Callable[[str], InMemoryRepository]:
    """Return a loader for ``tests/repositories/<name>.json``."""

    def _load(name: str) -> InMemoryRepository:
        return InMemoryRepository.from_file(REPOSITORIES_DIR / f"{name}.json")

    return _load


def assert_consistent(
    resolved: Mapping[str, str],
    demands: Mapping[str, str],
    repository: InMemoryRepository,
) -> None:
    """Assert ``resolved`` honours the root demands and every dependency range."""
    for name, range_ in demands.items():
        assert name in resolved
        assert satisfies(resolved[name], range_)

    for name, version in resolved.items():
        assert version in repository.get_versions(name)
        for child, range_ in repository.get_dependencies(name, version).items():
            assert child in resolved, f"{name}@{version} needs missing {child}"
            assert satisfies(resolved[child], range_), (
                f"{child}@{resolved[child]} violates {range_} from {name}@{version}"
            )


@pytest.fixture
def check_consistency() -> Callable[..., None]:
    """Expose :func:`assert_consistent` to tests."""
    return assert_consistent


@pytest.fixture
def counting_repository(
    load_repository: Callable[[str], InMemoryRepository],
) -> Callable[[str], CountingRepository]:
    """Return a loader that wraps a fixture repository in a call counter."""

    def _load(name: str) -> CountingRepository:
        return CountingRepository(load_repository(name))

    return _load
