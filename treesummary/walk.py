# treesummary/walk.py

"""Content-collection pass: list the files a summary should contain."""


from __future__ import annotations

import logging
import os
from pathlib import Path

from treesummary.classify import Decision, classify, describe
from treesummary.policy import FilterPolicy

logger = logging.getLogger(__name__)


def walk_files(root: Path, policy: FilterPolicy) -> list[Path]:
    """
    Return every included file under ``root``, sorted by path.

    The traversal is depth-first. Directories are classified before being
    entered and pruned directories are removed in place, so nothing below
    them is ever listed. The root itself is not classified. Directories that
    cannot be read are skipped and the walk continues with their siblings.

    Parameters
    ----------
    root : pathlib.Path
        Directory to walk.
    policy : FilterPolicy
        Rules applied to every entry.

    Returns
    -------
    list[pathlib.Path]
        Included file paths (prefixed by ``root`` as given), sorted
        component-wise in ascending order.

    Raises
    ------
    ValueError
        If ``root`` is not a directory.
    """

    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")

    def on_error(exc: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(
        root, onerror=on_error, followlinks=policy.follow_symlinks
    ):
        base = Path(dirpath)

        kept = []
        for name in dirnames:
            entry = describe(base / name, follow_symlinks=policy.follow_symlinks)
            if entry is None or not entry.is_dir:
                continue
            if classify(entry, policy) is Decision.PRUNE:
                logger.debug("Pruned %s", base / name)
                continue
            kept.append(name)
        dirnames[:] = sorted(kept)

        for name in filenames:
            entry = describe(base / name, follow_symlinks=policy.follow_symlinks)
            if entry is None or entry.is_dir:
                continue
            if classify(entry, policy) is Decision.INCLUDE:
                files.append(base / name)

    files.sort()
    return files
