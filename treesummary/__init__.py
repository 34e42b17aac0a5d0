"""
treesummary — summarize directory trees and file contents as one text report.

This package renders one or more directory trees and concatenates the
contents of every file that passes a configurable filter policy, producing a
single artifact a reviewer or a language model can read end to end.

Both the tree and the content sections are filtered by the same predicate,
:func:`~treesummary.classify.classify`, so they always agree on which files
exist.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .classify import Decision, Entry, classify
from .content import read_content
from .policy import FilterPolicy, build_policy
from .report import assemble_report, build_report
from .tree import path_tree
from .walk import walk_files

__all__ = [
    "Decision",
    "Entry",
    "FilterPolicy",
    "assemble_report",
    "build_policy",
    "build_report",
    "classify",
    "path_tree",
    "read_content",
    "walk_files",
]
