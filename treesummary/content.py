# treesummary/content.py

"""
File content extraction.

:func:`read_content` turns one included file into the text that appears in a
summary. It never raises: oversized, binary and undecodable files are
replaced by fixed placeholder strings, since a summary aims at best-effort
visibility rather than strict validation.

Decisions are taken in this order:
- size above the policy ceiling (metadata only, the file is not opened),
- NUL byte within the first 1024 bytes,
- strict UTF-8 decoding, then strict Shift_JIS (Windows code page 932).
"""


from __future__ import annotations

import logging
from pathlib import Path

from treesummary.policy import FilterPolicy

logger = logging.getLogger(__name__)

SIZE_EXCEEDED_PLACEHOLDER = "[File size exceeds limit; skipped]\n"
BINARY_PLACEHOLDER = "[Binary file skipped]\n"
UNDECODABLE_PLACEHOLDER = "[Cannot decode file content]"

BINARY_PROBE_SIZE = 1024
PRIMARY_ENCODING = "utf-8"
FALLBACK_ENCODING = "cp932"


def is_binary_file(path: Path, *, sample_size: int = BINARY_PROBE_SIZE) -> bool:
    """
    Return ``True`` if the first ``sample_size`` bytes of ``path`` hold a NUL.

    A file that cannot be opened or read is reported as binary.
    """

    try:
        with path.open("rb") as f:
            sample = f.read(sample_size)
    except OSError as exc:
        logger.debug("Binary probe failed for %s: %s", path, exc)
        return True
    return b"\x00" in sample


def decode_text(data: bytes) -> str | None:
    """
    Decode ``data`` with the primary encoding, then the fallback one.

    Returns ``None`` when neither decodes cleanly.
    """

    for encoding in (PRIMARY_ENCODING, FALLBACK_ENCODING):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return None


def file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def read_content(path: Path, policy: FilterPolicy) -> str:
    """
    Return the text of ``path`` or the placeholder that replaces it.

    Parameters
    ----------
    path : pathlib.Path
        File to read.
    policy : FilterPolicy
        Supplies ``max_content_bytes``. A file of exactly that size is read.

    Returns
    -------
    str
        The decoded file contents, :data:`SIZE_EXCEEDED_PLACEHOLDER`,
        :data:`BINARY_PLACEHOLDER` or :data:`UNDECODABLE_PLACEHOLDER`.
    """

    if file_size(path) > policy.max_content_bytes:
        logger.debug("Size limit exceeded: %s", path)
        return SIZE_EXCEEDED_PLACEHOLDER

    if is_binary_file(path):
        logger.debug("Binary file: %s", path)
        return BINARY_PLACEHOLDER

    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return UNDECODABLE_PLACEHOLDER

    text = decode_text(data)
    if text is None:
        logger.debug("Cannot decode %s", path)
        return UNDECODABLE_PLACEHOLDER
    return text
