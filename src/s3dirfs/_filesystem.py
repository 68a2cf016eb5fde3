"""FileSystem abstract base class — the filesystem contract."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, BinaryIO, List

if TYPE_CHECKING:
    from types import TracebackType

    from s3dirfs._path import FsPath, FsPathListWithError
    from s3dirfs._types import PathLike


class FileSystem(abc.ABC):
    """Abstract base class for filesystem implementations.

    Paths may be given as strings or :class:`FsPath` values. Implementations
    must never leak client-native exceptions; they are mapped to
    ``s3dirfs`` errors.
    """

    @abc.abstractmethod
    def init(self, config: Any) -> None:
        """Bind the filesystem to its store. Called at most once."""

    @abc.abstractmethod
    def fs_name(self) -> str:
        """Short identifier of the filesystem type (e.g. ``'s3'``)."""

    def root_user_name(self) -> str | None:
        """Name of the superuser, if the filesystem has one."""
        return None

    @abc.abstractmethod
    def get(self, dest: PathLike) -> FsPath:
        """Return ``dest`` as an :class:`FsPath`.

        :raises NotFound: If nothing exists at ``dest``.
        """

    @abc.abstractmethod
    def read(self, dest: PathLike) -> BinaryIO:
        """Open a file for reading and return a binary stream.

        :raises NotFound: If the file does not exist.
        """

    @abc.abstractmethod
    def write(self, dest: PathLike, overwrite: bool) -> BinaryIO:
        """Open a file for writing and return a binary sink."""

    @abc.abstractmethod
    def create(self, dest: PathLike) -> bool:
        """Create an empty file. Returns ``False`` if it already exists."""

    @abc.abstractmethod
    def list(self, path: PathLike) -> List[FsPath]:
        """List entries under ``path``."""

    @abc.abstractmethod
    def list_path_with_error(self, path: PathLike, ignore_init_file: bool = True) -> FsPathListWithError | None:
        """List the direct children of ``path`` together with an error message."""

    @abc.abstractmethod
    def exists(self, dest: PathLike) -> bool:
        """Check if a file or directory exists. Never raises ``NotFound``."""

    @abc.abstractmethod
    def delete(self, dest: PathLike) -> bool:
        """Delete a file or directory tree."""

    @abc.abstractmethod
    def rename_to(self, old_dest: PathLike, new_dest: PathLike) -> bool:
        """Move a file or directory tree."""

    @abc.abstractmethod
    def copy(self, origin: PathLike, dest: PathLike) -> bool:
        """Copy a file or directory tree."""

    @abc.abstractmethod
    def mkdir(self, dest: PathLike) -> bool:
        """Create a directory. Returns ``False`` if it already exists."""

    @abc.abstractmethod
    def mkdirs(self, dest: PathLike) -> bool:
        """Create a directory and, where supported, its parents."""

    @abc.abstractmethod
    def list_root(self) -> str:
        """The root path of the filesystem."""

    # region: permissions and capacity

    @abc.abstractmethod
    def can_read(self, dest: PathLike, user: str | None = None) -> bool:
        """Whether ``dest`` is readable, optionally by a specific ``user``."""

    @abc.abstractmethod
    def can_write(self, dest: PathLike) -> bool: ...

    @abc.abstractmethod
    def can_execute(self, dest: PathLike) -> bool: ...

    @abc.abstractmethod
    def get_total_space(self, dest: PathLike) -> int: ...

    @abc.abstractmethod
    def get_free_space(self, dest: PathLike) -> int: ...

    @abc.abstractmethod
    def get_usable_space(self, dest: PathLike) -> int: ...

    @abc.abstractmethod
    def set_owner(self, dest: PathLike, user: str, group: str | None = None) -> bool: ...

    @abc.abstractmethod
    def set_group(self, dest: PathLike, group: str) -> bool: ...

    @abc.abstractmethod
    def set_permission(self, dest: PathLike, permission: str) -> bool: ...

    # endregion

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    def __enter__(self) -> FileSystem:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
