"""
Filesystem access used by the flattener.

The flattener only ever needs three things from a filesystem: list a
directory, tell whether an entry is a directory, and rename an entry inside
its own parent. Keeping them on one object lets the traversal run against
an in-memory tree in tests.
"""

import errno
import os
import stat
from pathlib import Path
from typing import List


class LocalFileSystem:
    """The real filesystem, accessed through os and pathlib."""

    def list_dir(self, directory: Path) -> List[Path]:
        """Return the immediate children of ``directory``.

        The listing is read completely before returning, in the order the
        operating system reports it.
        """
        return list(directory.iterdir())

    def is_dir(self, path: Path) -> bool:
        """Return True if ``path`` is a directory, following symlinks.

        Unlike Path.is_dir(), a failed stat raises OSError instead of
        returning False.
        """
        return stat.S_ISDIR(os.stat(path).st_mode)

    def rename(self, path: Path, new_name: str) -> Path:
        """Rename ``path`` to ``new_name`` within the same parent directory.

        Refuses to replace an existing entry.
        """
        target = path.parent / new_name
        if target.exists() or target.is_symlink():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(target))
        os.rename(path, target)
        return target
