"""Quickstart — directories, files and listings on an S3-compatible store.

Demonstrates:
- Binding an S3FileSystem to a bucket from a settings dict
- Creating a directory and writing a file into it
- Shallow and deep listings
- Renaming and deleting a directory

Point it at any S3-compatible endpoint (MinIO, moto server, ...) through
the ``S3_ENDPOINT``, ``S3_BUCKET``, ``S3_ACCESS_KEY`` and ``S3_SECRET_KEY``
environment variables. The bucket must already exist.
"""

from __future__ import annotations

import logging
import os

from s3dirfs import S3FileSystem

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    settings = {
        "accessKey": os.environ.get("S3_ACCESS_KEY", "minioadmin"),
        "secretKey": os.environ.get("S3_SECRET_KEY", "minioadmin"),
        "endPoint": os.environ.get("S3_ENDPOINT", "http://localhost:9000"),
        "bucket": os.environ.get("S3_BUCKET", "demo"),
        "region": os.environ.get("S3_REGION", "us-east-1"),
    }

    with S3FileSystem(settings) as fs:
        fs.mkdir("/reports")

        with fs.write("/reports/2024.txt", overwrite=True) as out:
            out.write(b"Q1 done\n")

        # Append by reopening without overwrite
        with fs.write("/reports/2024.txt", overwrite=False) as out:
            out.write(b"Q2 done\n")

        print(fs.read("/reports/2024.txt").read().decode())

        listing = fs.list_path_with_error("/reports")
        if listing is not None:
            for entry in listing:
                kind = "dir " if entry.is_dir else "file"
                print(f"{kind} {entry.path} ({entry.length} bytes)")

        fs.rename_to("/reports", "/archive")
        print(f"Deep listing: {[e.path for e in fs.list('/archive')]}")

        fs.delete("/archive")
        print(f"Still there: {fs.exists('/archive/2024.txt')}")
