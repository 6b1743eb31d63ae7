import subprocess
from pathlib import Path
from unittest import mock

import pytest

from typedgit2 import process, settings
from typedgit2._wrappers import native_adaptation
from typedgit2.constants import (
    GIT_CONFIG_LEVEL_GLOBAL,
    GIT_CONFIG_LEVEL_SYSTEM,
    GIT_CONFIG_LEVEL_XDG,
)
from typedgit2.repository import Repository

needs_libgit2 = pytest.mark.skipif(
    native_adaptation.lib is None, reason="libgit2 isn’t available"
)


def git(repo_root: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", "-C", str(repo_root), *args], check=True, capture_output=True, text=True
    )
    return completed.stdout.strip()


@pytest.fixture
def libgit2():
    """Initialize libgit2 for the duration of a test."""
    if native_adaptation.lib is None:
        pytest.skip("libgit2 isn’t available")

    # Other tests may fiddle with the state, start out clean.
    with mock.patch.object(process, "_state", process.LibraryState.UNINITIALIZED):
        handle = process.init()
        for level in (GIT_CONFIG_LEVEL_SYSTEM, GIT_CONFIG_LEVEL_XDG, GIT_CONFIG_LEVEL_GLOBAL):
            settings.search_path[level] = "/dev/null"
        try:
            yield handle
        finally:
            handle.deinit()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    repo_root = tmp_path / "git_repo"
    repo_root.mkdir()
    git(repo_root, "init", "--initial-branch", "main")

    a_file = repo_root / "a_file"
    a_file.write_text("A file.\n")
    git(repo_root, "add", str(a_file))
    git(repo_root, "commit", "-m", "Add a file")

    return repo_root


@pytest.fixture
def repo_root_str(repo_root: Path) -> str:
    return str(repo_root)


@pytest.fixture
def head_sha(repo_root: Path) -> str:
    return git(repo_root, "rev-parse", "HEAD")


@pytest.fixture
def repo(libgit2, repo_root: Path) -> Repository:
    repo = Repository.open(repo_root)
    yield repo
    repo.deinit()
