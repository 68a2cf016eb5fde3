"""Shared test fixtures and marker registration."""

from __future__ import annotations

import socket
import uuid
from typing import TYPE_CHECKING

import pytest
from _helpers import REGION, make_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from s3dirfs import S3FileSystem


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: requires external services")


def _moto_available() -> bool:
    try:
        import boto3  # noqa: F401
        import moto  # noqa: F401

        return True
    except ImportError:
        return False


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("", 0))
        return s.getsockname()[1]


@pytest.fixture(scope="session")
def moto_server() -> Iterator[str | None]:
    """Start a moto HTTP server for the test session."""
    if not _moto_available():
        yield None
        return
    from moto.moto_server.threaded_moto_server import ThreadedMotoServer

    port = _free_port()
    server = ThreadedMotoServer(port=port, verbose=False)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


@pytest.fixture()
def bucket(moto_server: str | None) -> str:
    """Create a fresh bucket on the moto server."""
    if moto_server is None:
        pytest.skip("moto/boto3 not installed")
    import boto3

    name = f"test-{uuid.uuid4().hex[:8]}"
    client = boto3.client(
        "s3",
        endpoint_url=moto_server,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name=REGION,
    )
    client.create_bucket(Bucket=name)
    return name


@pytest.fixture()
def fs(moto_server: str, bucket: str) -> Iterator[S3FileSystem]:
    """An initialized filesystem bound to a fresh bucket."""
    from s3dirfs import S3FileSystem

    filesystem = S3FileSystem(make_settings(moto_server, bucket))
    yield filesystem
    filesystem.close()
