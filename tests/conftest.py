import pytest
import tempfile
from pathlib import Path
from git import Repo
import os

from commitional.engine import RulesEngine
from commitional.config import default_rules


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep COMMITIONAL_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("COMMITIONAL_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        # Initialize git repo
        repo = Repo.init(tmp_dir)

        # Create a test file
        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        # Initial commit
        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def namespaced_repo():
    """Create a monorepo style git repository with apps and libs."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)

        for relative in ["README.md", "apps/myapp/index.ts", "apps/otherapp/index.ts", "libs/shared/index.ts"]:
            file_path = Path(tmp_dir) / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(f"// {relative}\n")

        repo.index.add(["README.md", "apps/myapp/index.ts", "apps/otherapp/index.ts", "libs/shared/index.ts"])
        repo.index.commit("chore: Initial layout")

        yield tmp_dir


@pytest.fixture
def default_engine():
    """Rules engine built from the default rule set."""
    return RulesEngine.from_rules(default_rules())
