"""Configuration model — the immutable settings a filesystem is bound to."""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from s3dirfs._errors import ConfigurationError

# Accepted spellings for each field in ``S3Config.from_dict``.
_ALIASES: dict[str, tuple[str, ...]] = {
    "access_key": ("accessKey", "access_key"),
    "secret_key": ("secretKey", "secret_key"),
    "endpoint": ("endPoint", "endpoint"),
    "bucket": ("bucket",),
    "region": ("region",),
    "label": ("label",),
    "client_options": ("clientOptions", "client_options"),
}

REQUIRED = ("access_key", "secret_key", "endpoint", "bucket", "region")


@dataclasses.dataclass(frozen=True)
class S3Config:
    """Settings for one bucket binding.

    :param access_key: Access key ID.
    :param secret_key: Secret access key.
    :param endpoint: Store URL (e.g. ``http://minio:9000``).
    :param bucket: Target bucket name.
    :param region: Store region.
    :param label: Optional label carried for the lifetime of the filesystem.
    :param client_options: Extra keyword arguments forwarded to the client factory.
    """

    access_key: str = ""
    secret_key: str = dataclasses.field(default="", repr=False)
    endpoint: str = ""
    bucket: str = ""
    region: str = ""
    label: Optional[str] = None
    client_options: dict[str, Any] = dataclasses.field(default_factory=dict)

    def missing(self) -> tuple[str, ...]:
        """Names of required settings that are absent or blank."""
        return tuple(name for name in REQUIRED if not str(getattr(self, name) or "").strip())

    def validate(self) -> None:
        """Check that every required setting is present.

        :raises ConfigurationError: If any required setting is missing.
        """
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Missing required S3 settings: {', '.join(missing)}",
                missing=missing,
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> S3Config:
        """Construct from a plain dict (e.g. parsed properties).

        Keys may use either ``accessKey``/``secretKey``/``endPoint`` or their
        snake_case forms.
        """
        if not isinstance(data, dict):
            msg = "Expected S3 settings to be a dict"
            raise TypeError(msg)
        values: dict[str, Any] = {}
        for field, names in _ALIASES.items():
            for name in names:
                if data.get(name) is not None:
                    values[field] = data[name]
                    break
        options = values.pop("client_options", {})
        if not isinstance(options, dict):
            msg = "Expected 'client_options' to be a dict"
            raise TypeError(msg)
        for field in REQUIRED:
            if field in values:
                values[field] = str(values[field])
        return cls(client_options=dict(options), **values)
