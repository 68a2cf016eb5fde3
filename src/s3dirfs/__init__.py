"""Hierarchical filesystem emulation over an S3-compatible object store."""

from s3dirfs._config import S3Config
from s3dirfs._errors import (
    BackendUnavailable,
    ConfigurationError,
    NotFound,
    PermissionDenied,
    S3FsError,
    StoreIOError,
    UsageError,
)
from s3dirfs._filesystem import FileSystem
from s3dirfs._keys import INIT_FILE_NAME, to_key, to_key_exact, to_path
from s3dirfs._path import FsPath, FsPathListWithError
from s3dirfs._plan import Action, MutationPlan, PlanStep, StepStatus
from s3dirfs._s3 import S3FileSystem, State
from s3dirfs._stream import S3OutputStream

__version__ = "0.1.0"

__all__ = [
    # Core
    "FileSystem",
    "S3FileSystem",
    "State",
    "S3OutputStream",
    # Path & keys
    "FsPath",
    "FsPathListWithError",
    "INIT_FILE_NAME",
    "to_key",
    "to_key_exact",
    "to_path",
    # Plans
    "Action",
    "MutationPlan",
    "PlanStep",
    "StepStatus",
    # Config
    "S3Config",
    # Errors
    "S3FsError",
    "ConfigurationError",
    "NotFound",
    "PermissionDenied",
    "StoreIOError",
    "BackendUnavailable",
    "UsageError",
    # Version
    "__version__",
]
