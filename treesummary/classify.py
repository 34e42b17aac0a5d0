# treesummary/classify.py

"""
Entry classification.

:func:`classify` is the single predicate deciding whether a filesystem entry
belongs in a summary. The tree pass and the content pass both call it, and
both obtain their entry descriptors through :func:`describe`, so they cannot
disagree on which files exist.
"""


from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from treesummary.policy import CANONICAL_EXTENSIONLESS_NAMES, FilterPolicy

logger = logging.getLogger(__name__)


class Decision(enum.Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"
    PRUNE = "prune"


def extension_of(name: str) -> str | None:
    """
    Return the lowercase extension of ``name`` including its leading dot.

    Only the text after the last dot counts, so ``types.d.ts`` yields
    ``".ts"``. Names without a dot, or whose only dot is the leading one
    (``.gitignore``), have no extension and yield ``None``.
    """

    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return "." + ext.lower()


def lossy(text: str) -> str:
    """Replace undecodable bytes of a file system name with U+FFFD."""
    return os.fsencode(text).decode("utf-8", "replace")


@dataclass(frozen=True)
class Entry:
    """A file or directory as seen by the classifier."""

    name: str
    is_dir: bool
    link_parts: tuple[str, ...] = ()

    @property
    def extension(self) -> str | None:
        if self.is_dir:
            return None
        return extension_of(self.name)


def link_target_parts(path: Path) -> tuple[str, ...]:
    """
    Return the components a directory link leads through.

    Only the part of the resolved target below the deepest directory it
    shares with the link's parent is returned, so ``vendor ->
    node_modules/pkg`` yields ``("node_modules", "pkg")``.
    """

    target = path.resolve()
    parent = path.parent.resolve()
    try:
        common = Path(os.path.commonpath([target, parent]))
    except ValueError:
        # Different drives.
        return target.parts
    return target.relative_to(common).parts


def describe(path: Path, *, follow_symlinks: bool = False) -> Entry | None:
    """
    Describe ``path`` for classification, or return ``None`` if it is skipped.

    Symbolic links to regular files are files. Symbolic links to directories
    are directories only when ``follow_symlinks`` is set and are skipped
    otherwise; a followed link records the components of its target in
    ``link_parts`` so a link into an ignored directory is pruned like the
    directory itself. Dangling links, special files and entries that cannot
    be stat'ed are skipped.
    """

    try:
        if path.is_dir():
            if not path.is_symlink():
                return Entry(path.name, is_dir=True)
            if not follow_symlinks:
                return None
            return Entry(path.name, is_dir=True, link_parts=link_target_parts(path))
        if path.is_file():
            return Entry(path.name, is_dir=False)
    except OSError as exc:
        logger.debug("Cannot stat %s: %s", path, exc)
    return None


def classify(entry: Entry, policy: FilterPolicy) -> Decision:
    """
    Decide whether ``entry`` is included under ``policy``.

    Rules are evaluated in order and the first match wins:

    1. a directory whose name is ignored, or a followed link whose target
       passes through an ignored directory, is pruned,
    2. a whitelisted file name is included,
    3. an ignored file name is excluded,
    4. a file with an extension is excluded if the extension is ignored, or
       if an allow-list exists and does not contain it,
    5. a file without an extension is included only when there is no
       allow-list or its name is a canonical extensionless name.

    Any other directory is included, meaning it is rendered and descended
    into.
    """

    name = entry.name
    if entry.is_dir:
        if name in policy.ignored_directories or any(
            part in policy.ignored_directories for part in entry.link_parts
        ):
            return Decision.PRUNE
        return Decision.INCLUDE

    if name in policy.whitelist_filenames:
        return Decision.INCLUDE
    if name in policy.ignore_filenames:
        return Decision.EXCLUDE

    ext = entry.extension
    if ext is not None:
        if ext in policy.ignored_extensions:
            return Decision.EXCLUDE
        if policy.allowed_extensions and ext not in policy.allowed_extensions:
            return Decision.EXCLUDE
        return Decision.INCLUDE

    if not policy.allowed_extensions or name in CANONICAL_EXTENSIONLESS_NAMES:
        return Decision.INCLUDE
    return Decision.EXCLUDE
