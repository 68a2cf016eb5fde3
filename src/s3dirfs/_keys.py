"""Translation between filesystem paths and object keys.

Object stores have a flat namespace: ``a/b/c.txt`` is one opaque key, and
``a/b/`` is only a *prefix* shared by keys. Paths handed to the filesystem
use a leading ``/``; keys never do. Directories are made observable by a
zero-byte marker object named :data:`INIT_FILE_NAME` placed under their
prefix.
"""

from __future__ import annotations

from s3dirfs._path import SCHEME_PREFIX

INIT_FILE_NAME = ".s3_dir_init"
SEPARATOR = "/"


def to_key(path: str | None, add_trailing_slash: bool = True) -> str:
    """Convert a path to an object key or key prefix.

    Strips a single leading ``/``. When ``add_trailing_slash`` is set and the
    path does not already end in ``/``, one is appended, producing the prefix
    form used for shallow listings and directory markers.
    """
    if not path:
        return ""
    key = path[1:] if path.startswith(SEPARATOR) else path
    if add_trailing_slash and not path.endswith(SEPARATOR):
        key += SEPARATOR
    return key


def to_key_exact(path: str | None) -> str:
    """Convert a path to the key addressing exactly one object."""
    return to_key(path, add_trailing_slash=False)


def to_path(key: str | None) -> str:
    """Convert an object key back to an ``s3://`` path."""
    if not key:
        return ""
    if key.startswith(SEPARATOR):
        return SCHEME_PREFIX + key
    return SCHEME_PREFIX + SEPARATOR + key


def marker_key(path: str) -> str:
    """Key of the directory marker object for ``path``."""
    return to_key(path) + INIT_FILE_NAME


def is_marker(key: str) -> bool:
    return INIT_FILE_NAME in key


def has_extension(path: str) -> bool:
    """Whether the last path segment contains a ``.``.

    This is how ``exists`` guesses that a path names a file rather than a
    directory. Files without an extension and directories with a dot in
    their name are misclassified.
    """
    name = path.rstrip(SEPARATOR).rsplit(SEPARATOR, 1)[-1]
    return "." in name


def replace_prefix(key: str, origin: str, dest: str) -> str:
    """Substitute ``dest`` for the first occurrence of ``origin`` in ``key``."""
    return key.replace(origin, dest, 1)
