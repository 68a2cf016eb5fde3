"""Write buffer that uploads its content as one object on close."""

from __future__ import annotations

import io
import logging
from typing import Any

from s3dirfs._errors import client_errors

log = logging.getLogger(__name__)


class S3OutputStream(io.BytesIO):
    """In-memory sink bound to one object key.

    Everything written is held in memory; :meth:`close` uploads it with a
    single ``put_object``, replacing any previous content of the key. The
    store has no append, so nothing reaches it before ``close``. Leaving a
    ``with`` block closes the stream, so a block exited by an exception
    still uploads what was written so far. An instance belongs to the one
    writer that opened it.

    :param client: A boto3 S3 client.
    :param bucket: Destination bucket.
    :param key: Destination object key.
    :param path: Logical path, used in error messages.
    """

    def __init__(self, client: Any, bucket: str, key: str, *, path: str | None = None) -> None:
        super().__init__()
        self._client = client
        self._bucket = bucket
        self._key = key
        self._path = path if path is not None else key
        self._uploaded = False

    @property
    def key(self) -> str:
        return self._key

    def close(self) -> None:
        if self.closed:
            return
        if not self._uploaded:
            data = self.getvalue()
            with client_errors(self._path, bucket=self._bucket):
                self._client.put_object(Bucket=self._bucket, Key=self._key, Body=data)
            self._uploaded = True
            log.debug("Uploaded %d byte(s) to %r in bucket %r", len(data), self._key, self._bucket)
        super().close()

    def __del__(self) -> None:
        # Abandoned buffers are discarded, not uploaded.
        self._uploaded = True

    def __repr__(self) -> str:
        return f"S3OutputStream(bucket={self._bucket!r}, key={self._key!r})"
