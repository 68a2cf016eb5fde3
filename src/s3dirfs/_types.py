"""Type aliases used throughout s3dirfs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from s3dirfs._path import FsPath

PathLike = Union[str, "FsPath"]  # noqa: UP007
ClientFactory = Callable[..., Any]
