"""Listing engine — deep and shallow listings over a flat key space."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

from s3dirfs._errors import client_errors
from s3dirfs._keys import SEPARATOR, is_marker, to_key, to_key_exact, to_path
from s3dirfs._path import FsPath, FsPathListWithError

if TYPE_CHECKING:
    from datetime import datetime

log = logging.getLogger(__name__)


def _epoch_millis(value: datetime | None) -> int:
    if value is None:
        return 0
    return int(value.timestamp() * 1000)


def fill_storage_file(path: FsPath, summary: dict[str, Any]) -> FsPath:
    """Annotate ``path`` with the metadata of an object summary.

    The entry is classified as a directory when the part of the key below its
    immediate parent still contains a separator, which is only the case for
    keys ending in ``/``. Directories report a zero length.
    """
    key: str = summary["Key"]
    parent = path.parent
    parent_key = to_key(parent.path) if parent is not None else ""
    remainder = key[len(parent_key) :] if key.startswith(parent_key) else key
    is_dir = SEPARATOR in remainder
    owner = summary.get("Owner") or {}
    return FsPath(
        path.path,
        is_dir=is_dir,
        length=0 if is_dir else int(summary.get("Size", 0) or 0),
        modification_time=_epoch_millis(summary.get("LastModified")),
        owner=owner.get("DisplayName"),
    )


class ListingEngine:
    """Runs ``list_objects_v2`` requests against one bucket and shapes the results.

    Only the first response page is read. A truncated response is logged and
    the remaining keys are not returned.

    :param client: A boto3 S3 client.
    :param bucket: The bucket every request targets.
    """

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def list_objects(self, prefix: str, delimiter: str | None = None, *, path: str | None = None) -> dict[str, Any]:
        """Issue one listing request and return the raw response.

        :raises PermissionDenied: If the store rejects the request for authorization reasons.
        """
        kwargs: dict[str, Any] = {"Bucket": self._bucket, "Prefix": prefix, "FetchOwner": True}
        if delimiter is not None:
            kwargs["Delimiter"] = delimiter
        with client_errors(path if path is not None else prefix, bucket=self._bucket):
            response: dict[str, Any] = self._client.list_objects_v2(**kwargs)
        if response.get("IsTruncated"):
            log.warning("Listing of prefix %r in bucket %r was truncated after one page", prefix, self._bucket)
        return response

    def keys_under(self, prefix: str, *, path: str | None = None) -> List[str]:
        """All keys starting with ``prefix``, in store order."""
        response = self.list_objects(prefix, path=path)
        return [summary["Key"] for summary in response.get("Contents", [])]

    def count_children(self, path: str) -> int:
        """Number of objects plus common prefixes directly below ``path``."""
        response = self.list_objects(to_key(path), SEPARATOR, path=path)
        return len(response.get("Contents", [])) + len(response.get("CommonPrefixes", []))

    def list(self, path: str) -> List[FsPath]:
        """Deep listing of every object whose key starts with ``path``.

        Directory markers are left out. An empty path lists nothing.
        """
        if not path:
            return []
        response = self.list_objects(to_key_exact(path), path=path)
        return [
            fill_storage_file(FsPath.parse(to_path(summary["Key"])), summary)
            for summary in response.get("Contents", [])
            if not is_marker(summary["Key"])
        ]

    def list_path_with_error(self, path: str, ignore_init_file: bool = True) -> FsPathListWithError | None:
        """Shallow listing of the direct children of ``path``.

        Child objects come first, then one directory entry per common prefix.
        Returns ``None`` for an empty path.
        """
        if not path:
            return None
        response = self.list_objects(to_key(path), SEPARATOR, path=path)
        entries: list[FsPath] = []
        for summary in response.get("Contents", []):
            if ignore_init_file and is_marker(summary["Key"]):
                continue
            entries.append(fill_storage_file(FsPath.parse(to_path(summary["Key"])), summary))
        for common in response.get("CommonPrefixes", []):
            entries.append(FsPath.parse(to_path(common["Prefix"]), is_dir=True))
        return FsPathListWithError(entries, "")
