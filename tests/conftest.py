"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides a small tagged git repository shared by git and source tests.
"""

import sys
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local classdiff package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of classdiff modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("classdiff"):
        del sys.modules[module_name]


SIG = pygit2.Signature("Test User", "test@example.com")

V1_FILES = {
    "README.md": "# lib\n",
    "src/main/java/org/example/A.java": "package org.example;\nclass A {}\n",
}
V1_1_FILES = {**V1_FILES, "README.md": "# lib\n\nDocs only.\n"}
V2_FILES = {
    **V1_1_FILES,
    "src/main/java/org/example/A.java": "package org.example;\nclass A { int x; }\n",
    "src/main/java/org/example/B.java": "package org.example;\nclass B {}\n",
    "src/test/java/org/example/ATest.java": "class ATest {}\n",
}


def _commit_files(repo: pygit2.Repository, files: dict[str, str], message: str) -> pygit2.Oid:
    """Replace the working tree with ``files`` and commit on main."""
    workdir = Path(repo.workdir)
    for entry in list(repo.index):
        (workdir / entry.path).unlink(missing_ok=True)
    repo.index.clear()
    for rel, content in files.items():
        target = workdir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        repo.index.add(rel)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("refs/heads/main", SIG, SIG, message, tree, parents)


@pytest.fixture
def tagged_repo(tmp_path: Path) -> pygit2.Repository:
    """Repository with tags v1.0 (lightweight), v1.1 (annotated), v2.0 (lightweight).

    v1.1 only touches the README; v2.0 changes A, adds B and a test source.
    """
    repo_path = tmp_path / "origin"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    first = _commit_files(repo, V1_FILES, "v1.0")
    repo.references.create("refs/tags/v1.0", first)

    second = _commit_files(repo, V1_1_FILES, "docs")
    repo.create_tag("v1.1", second, pygit2.enums.ObjectType.COMMIT, SIG, "Release 1.1")

    third = _commit_files(repo, V2_FILES, "v2.0")
    repo.references.create("refs/tags/v2.0", third)

    return repo
