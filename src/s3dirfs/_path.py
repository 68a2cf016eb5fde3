"""FsPath — the path value returned by listings and lookups."""

from __future__ import annotations

import dataclasses
import posixpath
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from collections.abc import Iterator

SCHEME = "s3"
SCHEME_PREFIX = f"{SCHEME}://"


@dataclasses.dataclass(frozen=True)
class FsPath:
    """Immutable snapshot of a filesystem path and its metadata.

    A path carries no inherent file/directory distinction until a listing
    classifies it. Callers that want to annotate an entry further should
    derive a copy with :func:`dataclasses.replace`.

    :param path: Logical path, scheme stripped (e.g. ``"/d/file.txt"``).
    :param is_dir: Whether the entry was classified as a directory.
    :param length: Size in bytes; zero for directories.
    :param modification_time: Last modification time in epoch milliseconds.
    :param owner: Owner display name reported by the store, if any.
    """

    path: str
    is_dir: bool = False
    length: int = 0
    modification_time: int = 0
    owner: Optional[str] = None

    @classmethod
    def parse(cls, uri: str, **fields: object) -> FsPath:
        """Build an ``FsPath`` from a path or ``s3://`` URI.

        ``FsPath.parse("s3:///a/b").path == "/a/b"``.
        """
        path = uri[len(SCHEME_PREFIX) :] if uri.startswith(SCHEME_PREFIX) else uri
        return cls(path, **fields)  # type: ignore[arg-type]

    @property
    def uri(self) -> str:
        """The path with the ``s3://`` scheme prefixed."""
        if self.path.startswith("/"):
            return f"{SCHEME_PREFIX}{self.path}"
        return f"{SCHEME_PREFIX}/{self.path}"

    @property
    def name(self) -> str:
        """Final component of the path, ignoring a trailing slash."""
        return posixpath.basename(self.path.rstrip("/"))

    @property
    def parent(self) -> FsPath | None:
        """Parent directory, or ``None`` for the root."""
        stripped = self.path.rstrip("/")
        if not stripped:
            return None
        head = posixpath.dirname(stripped)
        return FsPath(head or ("/" if self.path.startswith("/") else ""), is_dir=True)

    def __str__(self) -> str:
        return self.path


@dataclasses.dataclass(frozen=True)
class FsPathListWithError:
    """Result of a shallow listing.

    :param paths: Child entries in store order; objects before common prefixes.
    :param error: Error message, empty on success.
    """

    paths: list[FsPath] = dataclasses.field(default_factory=list)
    error: str = ""

    def __iter__(self) -> Iterator[FsPath]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)
