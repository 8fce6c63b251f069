"""Git context for rules that depend on which files a commit touches."""
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from git import NULL_TREE, Repo

from .models import GitContext


def _paths(diffs: Iterable) -> List[str]:
    files: List[str] = []
    for diff in diffs:
        file_path = diff.b_path or diff.a_path
        if file_path and file_path not in files:
            files.append(file_path)
    return files


class GitContextProvider:
    """Read changed files and commit messages from a repository."""

    def __init__(self, repo_path: Union[str, Path] = "."):
        self.repo = Repo(repo_path, search_parent_directories=True)

    @property
    def root(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def staged(self) -> GitContext:
        """Files staged for the next commit."""
        if not self.repo.head.is_valid():
            # no commits yet: everything in the index is staged
            files = sorted({path for path, _stage in self.repo.index.entries})
            return GitContext(files=files, is_staged=True)
        return GitContext(files=_paths(self.repo.index.diff(self.repo.head.commit)), is_staged=True)

    def for_commit(self, rev: str) -> GitContext:
        """Files changed by an existing commit."""
        commit = self.repo.commit(rev)
        if commit.parents:
            diffs = commit.parents[0].diff(commit)
        else:
            diffs = commit.diff(NULL_TREE)
        return GitContext(files=_paths(diffs), is_staged=False)

    def messages(self, rev: str) -> List[Tuple[str, str]]:
        """``(sha, message)`` for a single revision or a ``a..b`` range, oldest first."""
        if ".." in rev:
            commits = list(self.repo.iter_commits(rev))
            commits.reverse()
        else:
            commits = [self.repo.commit(rev)]
        return [(commit.hexsha, commit.message) for commit in commits]
