from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from bumpwise.models import PackageMetadata


REGISTRY_DOCUMENTS: Dict[str, Dict[str, Any]] = {
    "chalk": {
        "dist-tags": {"latest": "3.0.0"},
        "versions": ["2.3.0", "2.3.1", "2.3.2", "2.4.0", "2.4.1", "2.4.2", "3.0.0"],
    },
    "ncu-test-tag": {
        "dist-tags": {
            "latest": "1.1.0",
            "next": "1.0.0-1",
            "beta": "1.0.1-beta.0",
            "task-42": "1.0.0-task-42.0",
        },
        "versions": [
            "0.1.0",
            "1.0.0-1",
            "1.0.0-beta.0",
            "1.0.0-task-42.0",
            "1.0.1-beta.0",
            "1.1.0",
            "1.1.1-beta.0",
            "1.2.0-dev.0",
        ],
    },
    "ncu-mock-pre": {
        "dist-tags": {"latest": "1.0.0"},
        "versions": ["1.0.0", "2.0.0-alpha.0"],
        "time": {
            "created": "2020-01-01T00:00:00.000Z",
            "modified": "2020-03-01T00:00:00.000Z",
            "1.0.0": "2020-01-01T00:00:00.000Z",
            "2.0.0-alpha.0": "2020-02-01T00:00:00.000Z",
        },
    },
    "eslint-plugin-jsdoc": {
        "dist-tags": {"latest": "37.0.3"},
        "versions": ["36.0.8", "36.1.0", "36.1.1", "37.0.3"],
    },
    "jsonlines": {
        "dist-tags": {"latest": "0.1.1"},
        "versions": ["0.1.0", "0.1.1"],
    },
    "juggernaut": {
        "dist-tags": {"latest": "2.1.1"},
        "versions": ["1.0.0", "2.0.0", "2.1.1"],
    },
    "mocha": {
        "dist-tags": {"latest": "9.1.3"},
        "versions": ["8.3.2", "8.4.0", "9.0.0", "9.1.3"],
    },
    "del": {
        "dist-tags": {"latest": "6.0.0"},
        "versions": ["5.1.0", "6.0.0"],
    },
}


@pytest.fixture
def registry_documents() -> Dict[str, Dict[str, Any]]:
    """Raw npm-registry-shaped documents keyed by package name."""
    return json.loads(json.dumps(REGISTRY_DOCUMENTS))


@pytest.fixture
def registry(registry_documents: Dict[str, Dict[str, Any]]) -> Dict[str, PackageMetadata]:
    """Parsed registry snapshot keyed by package name."""
    return {
        name: PackageMetadata.from_registry(name, document)
        for name, document in registry_documents.items()
    }


@pytest.fixture
def registry_file(tmp_path: Path, registry_documents: Dict[str, Dict[str, Any]]) -> Path:
    """Registry snapshot written to disk."""
    path = tmp_path / "registry.json"
    path.write_text(json.dumps(registry_documents), encoding="utf-8")
    return path


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    """A small package.json."""
    path = tmp_path / "package.json"
    path.write_text(
        json.dumps(
            {
                "name": "demo",
                "dependencies": {"chalk": "^2.3.0", "mocha": "^8.3.2"},
                "devDependencies": {"eslint-plugin-jsdoc": "~36.1.0"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run in an empty directory so no stray config file is discovered."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BUMPWISE_CONFIG", raising=False)
    yield tmp_path
