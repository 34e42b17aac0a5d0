# treesummary/policy.py

"""
Filter policy construction.

This module holds the immutable :class:`FilterPolicy` consumed by every
traversal pass, the default lookup tables it is built from, and the small
builder that turns raw comma-separated user input into resolved sets.

List options support two forms:
- a plain comma list replaces the defaults,
- a list prefixed with ``+,`` extends the defaults.
"""


from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

DEFAULT_ALLOWED_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".txt", ".md", ".py", ".js", ".java", ".cpp", ".c", ".cs", ".rb",
        ".go", ".rs", ".hpp", ".ts", ".tsx", ".d.ts", ".jsx", ".toml",
    }
)

DEFAULT_IGNORED_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".bin", ".zip", ".tar", ".gz", ".7z", ".rar", ".exe", ".dll", ".so",
        ".dylib", ".a", ".lib", ".obj", ".o", ".class", ".jar", ".war",
        ".ear", ".ipynb", ".jpg", ".jpeg", ".png", ".gif",
    }
)

DEFAULT_IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {
        ".git", ".vscode", "target", "node_modules", "__pycache__", ".idea",
        "build", "dist", ".ruff_cache", ".cache", ".tox", ".nox",
        ".pytest_cache", "htmlcov", "instance", ".env", ".venv", "env",
        "venv", "ENV", "site", ".mypy_cache", "debug",
    }
)

DEFAULT_WHITELIST_FILENAMES: frozenset[str] = frozenset(
    {"Dockerfile", "Makefile", "justfile"}
)

# Extensionless names that are worth reading even under an allow-list.
CANONICAL_EXTENSIONLESS_NAMES: frozenset[str] = frozenset(
    {
        "Makefile", "Dockerfile", "LICENSE", "README", ".gitignore",
        ".gitattributes", "justfile",
    }
)

DEFAULT_MAX_CONTENT_BYTES = 10 * 1024 * 1024

EXTEND_PREFIX = "+,"


@dataclass(frozen=True)
class FilterPolicy:
    """
    Resolved inclusion and exclusion rules.

    Built once before traversal and never mutated. Both the tree pass and the
    content pass read the same instance.

    Attributes
    ----------
    allowed_extensions : frozenset[str]
        Lowercase extensions starting with ``.``. Empty means "any extension".
    ignored_extensions : frozenset[str]
        Extensions that are always excluded, even when allowed.
    ignored_directories : frozenset[str]
        Directory names that are never descended into.
    whitelist_filenames : frozenset[str]
        Exact file names that are always included.
    ignore_filenames : frozenset[str]
        Exact file names that are excluded unless whitelisted.
    max_content_bytes : int
        Files strictly larger than this are not read.
    follow_symlinks : bool
        Whether symbolic links to directories are descended into. A link
        whose target passes through an ignored directory is never followed.
    """

    allowed_extensions: frozenset[str] = DEFAULT_ALLOWED_EXTENSIONS
    ignored_extensions: frozenset[str] = DEFAULT_IGNORED_EXTENSIONS
    ignored_directories: frozenset[str] = DEFAULT_IGNORED_DIRECTORIES
    whitelist_filenames: frozenset[str] = DEFAULT_WHITELIST_FILENAMES
    ignore_filenames: frozenset[str] = frozenset()
    max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES
    follow_symlinks: bool = False


def normalize_extension(value: str) -> str:
    """Lowercase ``value`` and make sure it starts with a dot."""
    value = value.strip().lower()
    if not value or value.startswith("."):
        return value
    return "." + value


def normalize_name(value: str) -> str:
    return value.strip()


def split_items(raw: str, normalize: Callable[[str], str] = normalize_name) -> set[str]:
    """Split a comma-separated string, normalising items and dropping blanks."""
    items = (normalize(part) for part in raw.split(","))
    return {item for item in items if item}


def resolve_set(
    raw: str | None,
    defaults: Iterable[str],
    normalize: Callable[[str], str] = normalize_name,
) -> frozenset[str]:
    """
    Resolve a raw list option against its defaults.

    Parameters
    ----------
    raw : str | None
        User input. ``None`` or a blank string selects the defaults, a value
        starting with ``+,`` extends them, anything else replaces them.
    defaults : Iterable[str]
        Default items for this option.
    normalize : Callable[[str], str], optional
        Applied to every parsed item before it is added.

    Returns
    -------
    frozenset[str]
        The resolved set. A replacing value that parses to nothing (for
        example ``","``) yields an empty set.
    """

    if raw is None or not raw.strip():
        return frozenset(defaults)

    raw = raw.strip()
    if raw.startswith(EXTEND_PREFIX):
        extra = split_items(raw[len(EXTEND_PREFIX):], normalize)
        return frozenset(defaults) | frozenset(extra)

    return frozenset(split_items(raw, normalize))


def build_policy(
    *,
    extensions: str | None = None,
    ignore_extensions: str | None = None,
    ignore_dirs: str | None = None,
    whitelist_filenames: str | None = None,
    ignore_files: str | None = None,
    max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES,
    follow_symlinks: bool = False,
) -> FilterPolicy:
    """
    Build a :class:`FilterPolicy` from raw comma-separated option values.

    ``extensions`` and ``ignore_dirs`` accept the ``+,`` extend form. The
    remaining list options are plain comma lists: ``None`` selects the
    default, an empty string selects the empty set.

    Raises
    ------
    ValueError
        If ``max_content_bytes`` is negative.
    """

    if max_content_bytes < 0:
        raise ValueError(f"max_content_bytes must be >= 0, got {max_content_bytes}")

    def plain(
        raw: str | None,
        defaults: frozenset[str],
        normalize: Callable[[str], str] = normalize_name,
    ) -> frozenset[str]:
        if raw is None:
            return defaults
        return frozenset(split_items(raw, normalize))

    return FilterPolicy(
        allowed_extensions=resolve_set(extensions, DEFAULT_ALLOWED_EXTENSIONS, normalize_extension),
        ignored_extensions=plain(ignore_extensions, DEFAULT_IGNORED_EXTENSIONS, normalize_extension),
        ignored_directories=resolve_set(ignore_dirs, DEFAULT_IGNORED_DIRECTORIES),
        whitelist_filenames=plain(whitelist_filenames, DEFAULT_WHITELIST_FILENAMES),
        ignore_filenames=plain(ignore_files, frozenset()),
        max_content_bytes=max_content_bytes,
        follow_symlinks=follow_symlinks,
    )
