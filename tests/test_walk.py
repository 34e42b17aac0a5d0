# tests/test_walk.py
import os
import stat
import sys
from pathlib import Path

import pytest

from treesummary.classify import Decision, classify, describe
from treesummary.policy import FilterPolicy, build_policy
from treesummary.walk import walk_files

IS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _rels(paths, root: Path):
    return [p.relative_to(root).as_posix() for p in paths]


def test_collects_included_files_sorted(tmp_path: Path):
    _make_file(tmp_path / "z.py")
    _make_file(tmp_path / "a.py")
    _make_file(tmp_path / "a/b.py")
    _make_file(tmp_path / "docs/readme.md")
    _make_file(tmp_path / "image.png")
    _make_file(tmp_path / "notes")

    files = walk_files(tmp_path, build_policy())

    # Component-wise order: "a" sorts before "a.py".
    assert _rels(files, tmp_path) == ["a/b.py", "a.py", "docs/readme.md", "z.py"]


def test_pruned_directories_are_never_listed(tmp_path: Path):
    _make_file(tmp_path / "keep.py")
    _make_file(tmp_path / "node_modules/pkg/index.js")
    _make_file(tmp_path / "src/node_modules/deep.py")
    _make_file(tmp_path / "src/ok.py")

    policy = build_policy(ignore_dirs="node_modules")
    assert _rels(walk_files(tmp_path, policy), tmp_path) == ["keep.py", "src/ok.py"]


def test_every_listed_file_is_included(tmp_path: Path):
    for rel in ["a.py", "b.bin", "c.txt", "Dockerfile", "LICENSE", "misc", "x/y.md", ".git/config"]:
        _make_file(tmp_path / rel)

    policy = build_policy()
    for path in walk_files(tmp_path, policy):
        assert classify(describe(path), policy) is Decision.INCLUDE


def test_root_name_is_not_classified(tmp_path: Path):
    root = tmp_path / "build"
    _make_file(root / "main.py")

    assert _rels(walk_files(root, build_policy()), root) == ["main.py"]


def test_root_must_be_a_directory(tmp_path: Path):
    _make_file(tmp_path / "single.py")
    with pytest.raises(ValueError):
        walk_files(tmp_path / "single.py", FilterPolicy())


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_symlinked_directory_follows_policy(tmp_path: Path):
    real = tmp_path / "real"
    _make_file(real / "inside.py")
    (tmp_path / "linkdir").symlink_to(real, target_is_directory=True)
    (tmp_path / "link.py").symlink_to(real / "inside.py")

    no_follow = walk_files(tmp_path, build_policy())
    assert _rels(no_follow, tmp_path) == ["link.py", "real/inside.py"]

    follow = walk_files(tmp_path, build_policy(follow_symlinks=True))
    assert _rels(follow, tmp_path) == ["link.py", "linkdir/inside.py", "real/inside.py"]


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_link_into_ignored_directory_is_not_followed(tmp_path: Path):
    _make_file(tmp_path / "node_modules/pkg/index.py")
    _make_file(tmp_path / "main.py")
    (tmp_path / "vendor").symlink_to(tmp_path / "node_modules/pkg", target_is_directory=True)

    files = walk_files(tmp_path, build_policy(follow_symlinks=True))
    assert _rels(files, tmp_path) == ["main.py"]


@pytest.mark.skipif(os.name != "posix" or IS_ROOT, reason="Permission bits test is POSIX-only and needs a non-root user")
def test_unreadable_directory_is_skipped(tmp_path: Path):
    secret = tmp_path / "secret"
    _make_file(secret / "hidden.py")
    _make_file(tmp_path / "visible.py")

    secret.chmod(0)
    try:
        assert _rels(walk_files(tmp_path, build_policy()), tmp_path) == ["visible.py"]
    finally:
        secret.chmod(stat.S_IRWXU)
