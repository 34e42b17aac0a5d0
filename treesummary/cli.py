# treesummary/cli.py

"""
Command-line interface.

Parses options into a :class:`~treesummary.policy.FilterPolicy`, validates
the requested roots, builds the report and delivers it to a file or to the
clipboard.
"""


from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import pyperclip

from treesummary import __version__
from treesummary.policy import DEFAULT_MAX_CONTENT_BYTES, build_policy
from treesummary.report import build_report

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="treesummary",
        description="Summarize directory structure and file contents into one text file.",
    )
    p.add_argument(
        "-d",
        "--directory",
        default=".",
        help="Directories to explore, comma-separated (default: current directory).",
    )
    p.add_argument(
        "-e",
        "--extensions",
        default=None,
        help="Allowed extensions, comma-separated (e.g. .txt,.md,.py). "
        "Prefix with '+,' to add to the defaults. A lone ',' allows any extension.",
    )
    p.add_argument(
        "-i",
        "--ignore-extensions",
        default=None,
        help="Extensions to ignore, comma-separated. An empty value ignores none.",
    )
    p.add_argument(
        "--ignore-files",
        default="",
        help="File names to ignore, comma-separated. Overrides allowed extensions but not the whitelist.",
    )
    p.add_argument(
        "--ignore-dirs",
        default=None,
        help="Directory names to ignore, comma-separated. Prefix with '+,' to add to the defaults.",
    )
    p.add_argument(
        "-w",
        "--whitelist-filenames",
        default=None,
        help="File names that are always included, comma-separated (default: Dockerfile,Makefile,justfile).",
    )
    p.add_argument("-o", "--output", default="summary.txt", help="Output file (default: summary.txt).")
    p.add_argument(
        "--max-size",
        type=int,
        default=DEFAULT_MAX_CONTENT_BYTES,
        help="Maximum file size to read, in bytes (default: %(default)s).",
    )
    p.add_argument(
        "-c",
        "--clipboard",
        action="store_true",
        help="Copy the output to the clipboard instead of writing a file.",
    )
    p.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolic links to directories.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log every filtering decision.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_roots(raw: str) -> list[Path]:
    """
    Split ``raw`` into root directories, dropping the invalid ones.

    Missing paths and paths that are not directories are logged as warnings
    and skipped.
    """

    roots: list[Path] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        path = Path(part)
        if not path.exists():
            logger.warning("Directory not found, skipping: %s", path)
        elif not path.is_dir():
            logger.warning("Path is not a directory, skipping: %s", path)
        else:
            roots.append(path)
    return roots


def deliver(text: str, *, output: str, clipboard: bool) -> bool:
    """Write ``text`` to ``output`` or the clipboard. Return ``False`` on failure."""
    if clipboard:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            logger.error("Failed to access the clipboard: %s. Try writing to a file instead.", exc)
            return False
        print("Output content has been copied to the clipboard.")
        return True

    try:
        Path(output).write_text(text, encoding="utf-8", newline="")
    except OSError as exc:
        logger.error("Cannot write %s: %s", output, exc)
        return False
    print(f"Output completed: {output}")
    return True


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        policy = build_policy(
            extensions=args.extensions,
            ignore_extensions=args.ignore_extensions,
            ignore_dirs=args.ignore_dirs,
            whitelist_filenames=args.whitelist_filenames,
            ignore_files=args.ignore_files,
            max_content_bytes=args.max_size,
            follow_symlinks=args.follow_symlinks,
        )
    except ValueError as exc:
        parser.error(str(exc))

    roots = parse_roots(args.directory)
    if not roots:
        logger.error("No valid directories specified or found.")
        return 0

    text = build_report(roots, policy)
    return 0 if deliver(text, output=args.output, clipboard=args.clipboard) else 1


if __name__ == "__main__":
    sys.exit(main())
