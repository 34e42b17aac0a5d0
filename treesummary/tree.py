# treesummary/tree.py

"""
Tree pass: render a directory as an indented Unicode tree.

The tree is first built as an ``anytree`` node hierarchy and then drawn with
``anytree.RenderTree`` using the continuous style, which yields the familiar
``├──`` / ``└──`` / ``│`` layout of the Unix ``tree`` command.

Filtering goes through :func:`treesummary.classify.classify`, the same
predicate the content pass uses. Pruned directories are omitted entirely;
directories that end up empty after filtering are still shown.
"""


from __future__ import annotations

import logging
from pathlib import Path

from anytree import ContStyle, Node, RenderTree

from treesummary.classify import Decision, Entry, classify, describe, lossy
from treesummary.policy import FilterPolicy

logger = logging.getLogger(__name__)


def display_name(root: Path) -> str:
    """Return the final component of ``root``, or ``root`` as written if it has none."""
    name = root.name
    if not name or name == "..":
        return lossy(str(root))
    return lossy(name)


def iter_children(d: Path, policy: FilterPolicy) -> list[tuple[Path, Entry]]:
    """
    Return the included children of ``d`` sorted by name.

    Directories and files are interleaved. An unreadable directory has no
    children.
    """

    try:
        children = sorted(d.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", d, exc)
        return []

    kept: list[tuple[Path, Entry]] = []
    for child in children:
        entry = describe(child, follow_symlinks=policy.follow_symlinks)
        if entry is None:
            continue
        if classify(entry, policy) is Decision.INCLUDE:
            kept.append((child, entry))
    return kept


def build_tree(root: Path, policy: FilterPolicy) -> Node:
    """
    Build the filtered tree under ``root`` as ``anytree`` nodes.

    Every node carries ``fs_path`` (the entry's path) and ``is_dir``. The
    root node is named after :func:`display_name` and is never filtered.

    Raises
    ------
    ValueError
        If ``root`` is not a directory.
    """

    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")

    def rec(d: Path, parent: Node) -> None:
        for child, entry in iter_children(d, policy):
            node = Node(lossy(entry.name), parent=parent, fs_path=child, is_dir=entry.is_dir)
            if entry.is_dir:
                rec(child, node)

    top = Node(display_name(root), fs_path=root, is_dir=True)
    rec(root, top)
    return top


def draw_tree(node: Node) -> str:
    """Draw ``node`` and its descendants, one entry per line."""
    return "\n".join(f"{pre}{n.name}" for pre, _, n in RenderTree(node, style=ContStyle()))


def path_tree(root: Path, policy: FilterPolicy) -> str:
    """Build and draw the filtered tree under ``root``."""
    return draw_tree(build_tree(root, policy))
