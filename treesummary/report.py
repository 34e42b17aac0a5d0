# treesummary/report.py

"""
Report assembly.

A report has two sections: the rendered tree of every root, then the content
of every included file, each preceded by a header naming its path and root.
Downstream consumers may parse this text, so its labels and separators are
fixed.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from treesummary.classify import lossy
from treesummary.content import read_content
from treesummary.policy import FilterPolicy
from treesummary.tree import display_name, path_tree
from treesummary.walk import walk_files

logger = logging.getLogger(__name__)

STRUCTURE_LABEL = "＜Directory Structure＞"
CONTENTS_LABEL = "＜File Contents＞"
SEPARATOR = "-" * 80


@dataclass
class RootSummary:
    """Tree text and (relative path, content) blocks for one root."""

    name: str
    tree: str
    files: list[tuple[str, str]] = field(default_factory=list)


def summarize_root(root: Path, policy: FilterPolicy) -> RootSummary:
    """Run the tree pass and the content pass over ``root``."""
    tree = path_tree(root, policy)
    files = [
        (lossy(path.relative_to(root).as_posix()), read_content(path, policy))
        for path in walk_files(root, policy)
    ]
    logger.debug("%s: %d file(s) collected", root, len(files))
    return RootSummary(name=display_name(root), tree=tree, files=files)


def tree_block(summary: RootSummary) -> str:
    return f"=== Tree for {summary.name} ===\n{summary.tree}\n\n"


def file_block(relative_path: str, root_name: str, content: str) -> str:
    return (
        f"{SEPARATOR}\n"
        f"{relative_path} (in {root_name}):\n"
        f"{SEPARATOR}\n"
        f"{content}\n\n"
    )


def _trim(section: str) -> str:
    # Each block ends with a blank line; drop it from the last one.
    return section[:-2] if section else section


def assemble_report(summaries: Iterable[RootSummary]) -> str:
    """
    Concatenate per-root summaries into the final report text.

    Roots are emitted in the order given; files keep their order within
    each root.
    """

    trees: list[str] = []
    contents: list[str] = []
    for summary in summaries:
        trees.append(tree_block(summary))
        for relative_path, content in summary.files:
            contents.append(file_block(relative_path, summary.name, content))

    return (
        f"{STRUCTURE_LABEL}\n\n{_trim(''.join(trees))}\n\n"
        f"{CONTENTS_LABEL}\n\n{_trim(''.join(contents))}"
    )


def build_report(roots: Iterable[Path], policy: FilterPolicy) -> str:
    """Summarize every root under ``policy`` and return the report text."""
    return assemble_report(summarize_root(root, policy) for root in roots)
