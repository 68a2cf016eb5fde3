"""Normalized error hierarchy for s3dirfs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from botocore.exceptions import BotoCoreError, ClientError, ConnectTimeoutError, EndpointConnectionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from s3dirfs._plan import MutationPlan

_ACCESS_CODES = frozenset({"AccessDenied", "403", "AllAccessDisabled", "InvalidAccessKeyId", "SignatureDoesNotMatch"})
_MISSING_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404", "NotFound"})


class S3FsError(Exception):
    """Base class for all s3dirfs errors.

    :param message: Human-readable error description.
    :param path: The path involved in the error, if any.
    :param dest: The second path of a two-path operation (copy, rename).
    :param bucket: The bucket the facade is bound to, if known.
    :param plan: The partially executed mutation plan, if any.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        dest: Optional[str] = None,
        bucket: Optional[str] = None,
        plan: Optional[MutationPlan] = None,
    ) -> None:
        self.path = path
        self.dest = dest
        self.bucket = bucket
        self.plan = plan
        super().__init__(message)

    def _context(self) -> list[str]:
        parts = []
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.dest is not None:
            parts.append(f"dest={self.dest!r}")
        if self.bucket is not None:
            parts.append(f"bucket={self.bucket!r}")
        return parts

    def __str__(self) -> str:
        parts = [super().__str__(), *self._context()]
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__()), *self._context()]
        return f"{cls}({', '.join(args)})"


class ConfigurationError(S3FsError):
    """Raised when required settings are missing at ``init``.

    :param missing: Names of the settings that were absent.
    """

    def __init__(self, message: str = "", *, missing: tuple[str, ...] = ()) -> None:
        self.missing = missing
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.missing:
            return f"{base} | missing={list(self.missing)!r}"
        return base


class NotFound(S3FsError):
    """Raised when a file or directory does not exist."""


class PermissionDenied(S3FsError):
    """Raised when the store rejects a request for authorization reasons."""


class StoreIOError(S3FsError):
    """Raised for any other failure reported by the store."""


class BackendUnavailable(S3FsError):
    """Raised when the store endpoint cannot be reached."""


class UsageError(S3FsError):
    """Raised when the filesystem is used before ``init`` or after ``close``."""


def error_code(exc: ClientError) -> str:
    """Return the S3 error code of a botocore ``ClientError``."""
    return str(exc.response.get("Error", {}).get("Code", ""))


def classify_code(
    code: str, message: str, *, path: str | None, dest: str | None = None, bucket: str | None = None
) -> S3FsError:
    """Map an S3 error code onto the s3dirfs hierarchy."""
    if code in _ACCESS_CODES:
        return PermissionDenied(f"Permission denied: {message}", path=path, dest=dest, bucket=bucket)
    if code in _MISSING_CODES:
        return NotFound(f"Not found: {message}", path=path, dest=dest, bucket=bucket)
    return StoreIOError(f"{code or 'Error'}: {message}", path=path, dest=dest, bucket=bucket)


def classify_error(
    exc: Exception, *, path: str | None, dest: str | None = None, bucket: str | None = None
) -> S3FsError:
    """Classify a botocore exception into an s3dirfs error type."""
    if isinstance(exc, ClientError):
        return classify_code(error_code(exc), str(exc), path=path, dest=dest, bucket=bucket)
    if isinstance(exc, (EndpointConnectionError, ConnectTimeoutError)):
        return BackendUnavailable(str(exc), path=path, dest=dest, bucket=bucket)
    return StoreIOError(str(exc), path=path, dest=dest, bucket=bucket)


@contextmanager
def client_errors(path: str | None = None, *, dest: str | None = None, bucket: str | None = None) -> Iterator[None]:
    """Map botocore exceptions raised inside the block to s3dirfs errors."""
    try:
        yield
    except S3FsError:
        raise
    except (ClientError, BotoCoreError) as exc:
        raise classify_error(exc, path=path, dest=dest, bucket=bucket) from None
