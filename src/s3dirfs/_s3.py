"""S3FileSystem — directory semantics on top of an S3-compatible bucket."""

from __future__ import annotations

import contextlib
import enum
import logging
import shutil
from typing import TYPE_CHECKING, Any, BinaryIO, List

from s3dirfs._config import S3Config
from s3dirfs._errors import NotFound, PermissionDenied, UsageError, client_errors
from s3dirfs._filesystem import FileSystem
from s3dirfs._keys import has_extension, marker_key, to_key_exact
from s3dirfs._listing import ListingEngine
from s3dirfs._mutation import MutationEngine
from s3dirfs._path import SCHEME, FsPath
from s3dirfs._stream import S3OutputStream

if TYPE_CHECKING:
    from s3dirfs._mutation import StepHook
    from s3dirfs._path import FsPathListWithError
    from s3dirfs._types import ClientFactory, PathLike

log = logging.getLogger(__name__)


class State(enum.Enum):
    """Lifecycle of an :class:`S3FileSystem`."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


def _as_path(dest: PathLike) -> str:
    if isinstance(dest, FsPath):
        return dest.path
    return FsPath.parse(str(dest)).path


class S3FileSystem(FileSystem):
    """Filesystem facade over one bucket of an S3-compatible store.

    The store has no directories, no rename and no append. Directories are
    emulated with marker objects and shared key prefixes, renames with
    copy-then-delete loops, and writes with a buffer uploaded on close. None
    of the multi-key operations are atomic.

    The configuration can be passed to the constructor or to :meth:`init`
    later; either way the bucket binding is fixed for the lifetime of the
    instance. Once bound, the instance holds no mutable state and may be
    shared between threads.

    :param config: Settings to bind immediately, as an :class:`S3Config` or a dict.
    :param client_factory: Callable building the S3 client; defaults to ``boto3.client``.
    :param before_step: Hook called before each step of a mutation plan.
    """

    def __init__(
        self,
        config: S3Config | dict[str, Any] | None = None,
        *,
        client_factory: ClientFactory | None = None,
        before_step: StepHook | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._before_step = before_step
        self._state = State.UNINITIALIZED
        self._config: S3Config | None = None
        self._client: Any = None
        self._listing: ListingEngine | None = None
        self._mutation: MutationEngine | None = None
        if config is not None:
            self.init(config)

    def __repr__(self) -> str:
        bucket = self._config.bucket if self._config is not None else None
        return f"S3FileSystem(bucket={bucket!r}, state={self._state.value!r})"

    # region: lifecycle

    def init(self, config: S3Config | dict[str, Any]) -> None:
        """Bind to a bucket and create the store client.

        :raises ConfigurationError: If a required setting is missing.
        :raises UsageError: If the filesystem was already initialized or closed.
        """
        if self._state is not State.UNINITIALIZED:
            raise UsageError(f"S3 filesystem cannot be initialized in state {self._state.value!r}")
        if not isinstance(config, S3Config):
            config = S3Config.from_dict(config)
        config.validate()
        self._client = self._create_client(config)
        self._config = config
        self._listing = ListingEngine(self._client, config.bucket)
        self._mutation = MutationEngine(self._client, config.bucket, self._listing, before_step=self._before_step)
        self._state = State.READY
        log.info("S3 filesystem bound to bucket %r at %s", config.bucket, config.endpoint)

    def _create_client(self, config: S3Config) -> Any:
        opts: dict[str, Any] = dict(config.client_options)
        factory = self._client_factory
        if factory is None:
            import boto3
            from botocore.config import Config

            factory = boto3.client
            opts.setdefault("config", Config(s3={"addressing_style": "path"}))
        with client_errors(bucket=config.bucket):
            return factory(
                "s3",
                endpoint_url=config.endpoint,
                aws_access_key_id=config.access_key,
                aws_secret_access_key=config.secret_key,
                region_name=config.region,
                **opts,
            )

    def close(self) -> None:
        if self._state is State.READY:
            close = getattr(self._client, "close", None)
            if close is not None:
                close()
            log.info("S3 filesystem for bucket %r closed", self.bucket)
        self._state = State.CLOSED

    @property
    def state(self) -> State:
        return self._state

    @property
    def config(self) -> S3Config | None:
        return self._config

    @property
    def bucket(self) -> str | None:
        return self._config.bucket if self._config is not None else None

    @property
    def label(self) -> str | None:
        return self._config.label if self._config is not None else None

    @property
    def client(self) -> Any:
        """The bound S3 client."""
        self._require_ready()
        return self._client

    def _not_ready(self) -> UsageError:
        return UsageError(f"S3 filesystem is not ready (state={self._state.value!r}); call init() first")

    def _require_ready(self) -> S3Config:
        """Return the bound configuration.

        :raises UsageError: Unless the filesystem is initialized and open.
        """
        config = self._config
        if self._state is not State.READY or config is None:
            raise self._not_ready()
        return config

    @property
    def _lister(self) -> ListingEngine:
        listing = self._listing
        if self._state is not State.READY or listing is None:
            raise self._not_ready()
        return listing

    @property
    def _mutator(self) -> MutationEngine:
        mutation = self._mutation
        if self._state is not State.READY or mutation is None:
            raise self._not_ready()
        return mutation

    # endregion

    # region: identity

    def fs_name(self) -> str:
        return SCHEME

    def list_root(self) -> str:
        return "/"

    # endregion

    # region: lookups

    def get(self, dest: PathLike) -> FsPath:
        path = _as_path(dest)
        if self.exists(path):
            return dest if isinstance(dest, FsPath) else FsPath(path)
        log.warning("File or folder does not exist: %r", path)
        raise NotFound(f"File or folder does not exist: {path}", path=path, bucket=self.bucket)

    def exists(self, dest: PathLike) -> bool:
        """Check whether ``dest`` exists.

        A last segment containing a ``.`` is taken to name a file and is
        checked with a single object lookup; anything else is treated as a
        directory and exists when a shallow listing returns at least one
        object or common prefix. Authorization failures count as absence;
        any other store failure, including a missing bucket, is raised.
        """
        path = _as_path(dest)
        try:
            if has_extension(path):
                return self._mutator.object_exists(to_key_exact(path), path=path)
            return self._lister.count_children(path) > 0
        except PermissionDenied:
            return False

    # endregion

    # region: read and write

    def read(self, dest: PathLike) -> BinaryIO:
        path = _as_path(dest)
        bucket = self._require_ready().bucket
        with client_errors(path, bucket=bucket):
            response = self._client.get_object(Bucket=bucket, Key=to_key_exact(path))
        return response["Body"]  # type: ignore[no-any-return]

    def write(self, dest: PathLike, overwrite: bool) -> S3OutputStream:
        """Open a write buffer for ``dest``, uploaded when it is closed.

        With ``overwrite=False`` the current content of the object is copied
        into the buffer first, so writes are appended after it. With
        ``overwrite=True`` the buffer starts empty and the previous content is
        replaced on close.
        """
        path = _as_path(dest)
        bucket = self._require_ready().bucket
        stream = S3OutputStream(self._client, bucket, to_key_exact(path), path=path)
        if not overwrite:
            try:
                existing = self.read(path)
            except NotFound:
                log.debug("No existing content at %r, starting empty", path)
            else:
                with contextlib.closing(existing), client_errors(path, bucket=bucket):
                    shutil.copyfileobj(existing, stream)
        return stream

    # endregion

    # region: listing

    def list(self, path: PathLike) -> List[FsPath]:
        return self._lister.list(_as_path(path))

    def list_path_with_error(self, path: PathLike, ignore_init_file: bool = True) -> FsPathListWithError | None:
        return self._lister.list_path_with_error(_as_path(path), ignore_init_file)

    # endregion

    # region: mutations

    def create(self, dest: PathLike) -> bool:
        return self._mutator.create(_as_path(dest))

    def delete(self, dest: PathLike) -> bool:
        return self._mutator.delete(_as_path(dest))

    def copy(self, origin: PathLike, dest: PathLike) -> bool:
        return self._mutator.copy(_as_path(origin), _as_path(dest))

    def rename_to(self, old_dest: PathLike, new_dest: PathLike) -> bool:
        return self._mutator.rename_to(_as_path(old_dest), _as_path(new_dest))

    def mkdir(self, dest: PathLike) -> bool:
        """Create the marker object of a directory.

        Returns ``False`` without error if the marker already exists.
        """
        path = _as_path(dest)
        return self._mutator.create_key(marker_key(path), path=path)

    def mkdirs(self, dest: PathLike) -> bool:
        """Same as :meth:`mkdir`; parent directories are not created.

        Every key is addressable without markers on its parents, so missing
        parents do not prevent use of the new directory.
        """
        return self.mkdir(dest)

    # endregion

    # region: permissions and capacity

    # The store models neither POSIX permissions nor capacity; these answers are fixed.

    def can_read(self, dest: PathLike, user: str | None = None) -> bool:
        return user is None

    def can_write(self, dest: PathLike) -> bool:
        return True

    def can_execute(self, dest: PathLike) -> bool:
        return True

    def get_total_space(self, dest: PathLike) -> int:
        return 0

    def get_free_space(self, dest: PathLike) -> int:
        return 0

    def get_usable_space(self, dest: PathLike) -> int:
        return 0

    def set_owner(self, dest: PathLike, user: str, group: str | None = None) -> bool:
        return False

    def set_group(self, dest: PathLike, group: str) -> bool:
        return False

    def set_permission(self, dest: PathLike, permission: str) -> bool:
        return False

    # endregion
