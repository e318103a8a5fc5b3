"""
Prefix building for flattened file names.

Every directory on the way down from the root contributes one segment to the
prefix. Segments are joined with " - " and the whole prefix is lowercased:

    Music / -Jazz / +Live  ->  music - jazz - live

A single leading '+' or '-' is stripped from every segment after the first,
so directories can be ordered in a file manager without the sign leaking into
file names. The root segment is kept as-is apart from lowercasing.
"""

from pathlib import PurePath

SEPARATOR = " - "
SIGN_CHARS = ("+", "-")


def leading_char(path: PurePath) -> str:
    """Return the first character of the last component of ``path``.

    Raises ValueError for paths without a name such as '/'.
    """
    name = path.name
    if not name:
        raise ValueError(f"path has no final component: {path}")
    return name[0]


def strip_leading_sign(tail: str) -> str:
    """Remove one leading '+' or '-' from ``tail``.

    -Jazz -> Jazz, +Live -> Live, --x -> -x
    """
    if tail.startswith(SIGN_CHARS):
        return tail[1:]
    return tail


def build_prefix(old_prefix: str, tail: str) -> str:
    """Extend ``old_prefix`` with the directory name ``tail``.

    The first segment is only lowercased; the sign is stripped from
    segments joined onto an existing prefix.
    """
    if not old_prefix:
        return tail.lower()
    return (old_prefix + SEPARATOR + strip_leading_sign(tail)).lower()
