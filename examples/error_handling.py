"""Error handling — mapped errors and partially applied mutations.

Demonstrates:
- Catching NotFound and PermissionDenied with their structured attributes
- Inspecting the plan attached to a failed multi-key operation

Uses the same environment variables as ``quickstart.py``.
"""

from __future__ import annotations

import os

from s3dirfs import NotFound, PermissionDenied, S3FileSystem, S3FsError

if __name__ == "__main__":
    settings = {
        "accessKey": os.environ.get("S3_ACCESS_KEY", "minioadmin"),
        "secretKey": os.environ.get("S3_SECRET_KEY", "minioadmin"),
        "endPoint": os.environ.get("S3_ENDPOINT", "http://localhost:9000"),
        "bucket": os.environ.get("S3_BUCKET", "demo"),
        "region": os.environ.get("S3_REGION", "us-east-1"),
    }

    with S3FileSystem(settings) as fs:
        # --- NotFound ---
        try:
            fs.get("/no/such/file.txt")
        except NotFound as exc:
            print(f"NotFound: {exc}")
            print(f"  path={exc.path}, bucket={exc.bucket}")

        # --- Partial rename ---
        for name in ("a.txt", "b.txt", "c.txt"):
            fs.create(f"/src/{name}")
        try:
            fs.rename_to("/src", "/dst")
        except PermissionDenied as exc:
            print(f"PermissionDenied: {exc}")
            if exc.plan is not None:
                for step in exc.plan.completed:
                    print(f"  done:    {step}")
                for step in exc.plan.failed:
                    print(f"  failed:  {step} ({step.error})")
                for step in exc.plan.pending:
                    print(f"  skipped: {step}")
        except S3FsError as exc:
            print(f"Store error: {exc!r}")
        else:
            print("Renamed /src to /dst")
