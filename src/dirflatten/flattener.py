"""
Recursive directory flattening.

Walks a tree depth-first and renames every file so its name starts with the
chain of directory names above it. Directories whose name starts with '.' or
'_' are not entered, and files whose name starts with '.' are left alone.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dirflatten.filesystem import LocalFileSystem
from dirflatten.prefix import SEPARATOR, build_prefix, leading_char

SKIP_TRAVERSE_CHARS = (".", "_")
SKIP_RENAME_CHARS = (".",)

TRAVERSE = "traverse"
SKIP = "skip"
LEAF = "leaf"


class FlattenError(Exception):
    """Raised when a flatten operation fails."""


class FlattenResult:
    """Result of a flatten operation."""

    def __init__(self):
        self.renamed: List[Tuple[Path, Path]] = []
        self.dotfiles_skipped = 0
        self.directories_traversed = 0
        self.directories_skipped = 0
        self.metadata_errors = 0

    def summary(self) -> str:
        """Return a human-readable, one-item-per-line report of the walk."""
        lines = []
        if self.renamed:
            lines.append(f"renamed {len(self.renamed)} file(s)")
        if self.directories_traversed:
            lines.append(f"visited {self.directories_traversed} directory(ies)")
        if self.directories_skipped:
            lines.append(
                f"skipped {self.directories_skipped} directory(ies) starting with '.' or '_'"
            )
        if self.dotfiles_skipped:
            lines.append(f"left {self.dotfiles_skipped} dotfile(s) untouched")
        if self.metadata_errors:
            lines.append(f"could not read metadata for {self.metadata_errors} entry(ies)")
        if not self.renamed:
            lines.append("no files were renamed")
        return "\n".join(f"  - {line}" for line in lines)


def classify_entry(
    path: Path,
    fs: Optional[LocalFileSystem] = None,
    result: Optional[FlattenResult] = None,
) -> str:
    """Return TRAVERSE, SKIP or LEAF for one directory entry.

    SKIP is a directory starting with '.' or '_': neither entered nor
    renamed. LEAF is anything that is not a directory, including entries
    whose metadata cannot be read (a diagnostic is printed for those).
    """
    if fs is None:
        fs = LocalFileSystem()

    try:
        is_dir = fs.is_dir(path)
    except OSError as e:
        print(f"  Cannot read metadata for {path}: {e}", file=sys.stderr)
        if result is not None:
            result.metadata_errors += 1
        return LEAF

    if not is_dir:
        return LEAF
    if leading_char(path) in SKIP_TRAVERSE_CHARS:
        if result is not None:
            result.directories_skipped += 1
        return SKIP
    return TRAVERSE


def should_traverse(
    path: Path,
    fs: Optional[LocalFileSystem] = None,
    result: Optional[FlattenResult] = None,
) -> bool:
    """Return True if ``path`` is a directory the flattener should enter."""
    return classify_entry(path, fs=fs, result=result) == TRAVERSE


def rename_entry(
    path: Path,
    prefix: str,
    fs: Optional[LocalFileSystem] = None,
    verbose: bool = False,
    result: Optional[FlattenResult] = None,
) -> Optional[Path]:
    """Prepend ``prefix`` to the name of ``path``, lowercasing the result.

    Dotfiles are not renamed. Returns the new path, or None if nothing was
    renamed. Rename failures propagate as OSError.
    """
    if leading_char(path) in SKIP_RENAME_CHARS:
        if result is not None:
            result.dotfiles_skipped += 1
        return None

    if fs is None:
        fs = LocalFileSystem()

    new_name = (prefix + SEPARATOR + path.name).lower()
    new_path = fs.rename(path, new_name)
    if verbose:
        print(f"    {path.name} -> {new_name}", file=sys.stderr)
    if result is not None:
        result.renamed.append((path, new_path))
    return new_path


def flatten(
    directory: Path,
    prev_prefix: str = "",
    fs: Optional[LocalFileSystem] = None,
    verbose: bool = False,
    result: Optional[FlattenResult] = None,
) -> FlattenResult:
    """Flatten ``directory`` and everything below it.

    The directory's own name is added to ``prev_prefix`` before its entries
    are processed, so the root of the walk is the first prefix segment.
    Listing and rename errors propagate as OSError; nothing is rolled back.
    """
    if fs is None:
        fs = LocalFileSystem()
    if result is None:
        result = FlattenResult()

    # Raises ValueError for nameless paths like '/'
    leading_char(directory)
    prefix = build_prefix(prev_prefix, directory.name)
    result.directories_traversed += 1

    if verbose:
        print(f"  {directory}  [{prefix}]", file=sys.stderr)

    for entry in fs.list_dir(directory):
        kind = classify_entry(entry, fs=fs, result=result)
        if kind == TRAVERSE:
            flatten(entry, prefix, fs=fs, verbose=verbose, result=result)
        elif kind == LEAF:
            rename_entry(entry, prefix, fs=fs, verbose=verbose, result=result)

    return result


def resolve_root(root: str) -> Path:
    """Resolve ``root`` to an absolute, symlink-free directory path.

    Raises FlattenError if the path does not exist or is not a directory.
    """
    try:
        path = Path(root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FlattenError(getattr(e, "strerror", None) or str(e)) from e

    if not path.is_dir():
        raise FlattenError("argument is not a directory")
    if not path.name:
        raise FlattenError(f"cannot flatten a filesystem root: {path}")
    return path


def flatten_tree(
    root: str,
    fs: Optional[LocalFileSystem] = None,
    verbose: bool = False,
) -> FlattenResult:
    """Validate ``root`` and flatten the tree below it.

    Steps:
    1. Resolve the root (must exist, symlinks resolved)
    2. Check that it is a directory
    3. Walk it with an empty starting prefix

    Any filesystem error during the walk aborts it. Files renamed before the
    failure keep their new names.
    """
    path = resolve_root(root)

    result = FlattenResult()
    try:
        flatten(path, "", fs=fs, verbose=verbose, result=result)
    except OSError as e:
        raise FlattenError(
            f"Flatten failed: {e}\n"
            f"{len(result.renamed)} file(s) renamed before the failure keep their new names."
        ) from e

    return result
