"""Mutation engine — create, delete, copy and rename as request sequences."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from botocore.exceptions import BotoCoreError, ClientError

from s3dirfs._errors import (
    PermissionDenied,
    S3FsError,
    classify_code,
    classify_error,
    error_code,
)
from s3dirfs._keys import replace_prefix, to_key_exact
from s3dirfs._plan import Action, MutationPlan, PlanStep, StepStatus

if TYPE_CHECKING:
    from s3dirfs._listing import ListingEngine

log = logging.getLogger(__name__)

_ABSENT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

StepHook = Callable[[PlanStep], None]


class MutationEngine:
    """Builds and executes mutation plans against one bucket.

    Nothing here is atomic across keys: a failure part way through leaves the
    steps already executed in place, and the raised error carries the plan so
    the caller can see which ones.

    :param client: A boto3 S3 client.
    :param bucket: The bucket every request targets.
    :param listing: Listing engine used to enumerate keys under a prefix.
    :param before_step: Optional hook called before each step is executed.
    """

    def __init__(
        self, client: Any, bucket: str, listing: ListingEngine, *, before_step: StepHook | None = None
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._listing = listing
        self._before_step = before_step

    # region: single objects

    def object_exists(self, key: str, *, path: str | None = None) -> bool:
        """Whether an object exists at exactly ``key``.

        :raises PermissionDenied: If the store rejects the request for authorization reasons.
        """
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if error_code(exc) in _ABSENT_CODES:
                return False
            raise classify_error(exc, path=path or key, bucket=self._bucket) from None
        except BotoCoreError as exc:
            raise classify_error(exc, path=path or key, bucket=self._bucket) from None
        return True

    # endregion

    # region: planning

    def plan_delete(self, path: str) -> MutationPlan:
        prefix = to_key_exact(path)
        plan = MutationPlan("delete", path)
        keys = self._listing.keys_under(prefix, path=path)
        if keys:
            plan.add(Action.DELETE_BATCH, prefix, keys=tuple(keys))
        return plan

    def plan_copy(self, origin: str, dest: str) -> MutationPlan:
        return self._plan_transfer("copy", origin, dest, delete_origin=False)

    def plan_rename(self, old: str, new: str) -> MutationPlan:
        return self._plan_transfer("rename", old, new, delete_origin=True)

    def _plan_transfer(self, operation: str, origin: str, dest: str, *, delete_origin: bool) -> MutationPlan:
        origin_prefix = to_key_exact(origin)
        dest_prefix = to_key_exact(dest)
        plan = MutationPlan(operation, origin, dest)
        for key in self._listing.keys_under(origin_prefix, path=origin):
            plan.add(Action.COPY, key, dest_key=replace_prefix(key, origin_prefix, dest_prefix))
            if delete_origin:
                plan.add(Action.DELETE, key)
        return plan

    # endregion

    # region: execution

    def execute(self, plan: MutationPlan) -> MutationPlan:
        """Run every pending step of ``plan`` in order.

        :raises PermissionDenied: On an authorization failure, with ``plan`` attached.
        :raises StoreIOError: On any other store failure, with ``plan`` attached.
        """
        for step in plan.steps:
            if step.status is not StepStatus.PENDING:
                continue
            try:
                if self._before_step is not None:
                    self._before_step(step)
                self._run(step, plan)
            except (ClientError, BotoCoreError) as exc:
                error = classify_error(exc, path=plan.path, dest=plan.dest, bucket=self._bucket)
                raise self._fail(step, plan, error) from None
            except S3FsError as exc:
                raise self._fail(step, plan, exc)
            step.status = StepStatus.DONE
            log.debug("%s: %s", plan.operation, step)
        return plan

    def _fail(self, step: PlanStep, plan: MutationPlan, exc: S3FsError) -> S3FsError:
        step.status = StepStatus.FAILED
        step.error = str(exc)
        exc.plan = plan
        return exc

    def _run(self, step: PlanStep, plan: MutationPlan) -> None:
        if step.action is Action.PUT:
            self._client.put_object(Bucket=self._bucket, Key=step.key, Body=b"")
        elif step.action is Action.COPY:
            self._client.copy_object(
                Bucket=self._bucket,
                Key=step.dest_key,
                CopySource={"Bucket": self._bucket, "Key": step.key},
            )
        elif step.action is Action.DELETE:
            self._client.delete_object(Bucket=self._bucket, Key=step.key)
        elif step.action is Action.DELETE_BATCH:
            response = self._client.delete_objects(
                Bucket=self._bucket,
                Delete={"Objects": [{"Key": key} for key in step.keys], "Quiet": True},
            )
            errors = response.get("Errors") or []
            if errors:
                first = errors[0]
                raise classify_code(
                    str(first.get("Code", "")),
                    f"{len(errors)} key(s) not deleted, first {first.get('Key')!r}: {first.get('Message', '')}",
                    path=plan.path,
                    bucket=self._bucket,
                )

    # endregion

    # region: operations

    def create(self, path: str) -> bool:
        """Create an empty object at ``path`` unless one already exists."""
        return self.create_key(to_key_exact(path), path=path)

    def create_key(self, key: str, *, path: str) -> bool:
        """Put a zero-byte object at ``key`` unless one already exists."""
        if self.object_exists(key, path=path):
            return False
        plan = MutationPlan("create", path)
        plan.add(Action.PUT, key)
        self.execute(plan)
        return True

    def delete(self, path: str) -> bool:
        """Delete every key under ``path`` with one batch request.

        A prefix with no keys is a successful no-op.
        """
        self.execute(self.plan_delete(path))
        return True

    def copy(self, origin: str, dest: str) -> bool:
        """Copy every key under ``origin`` to the matching key under ``dest``."""
        self.execute(self.plan_copy(origin, dest))
        return True

    def rename_to(self, old: str, new: str) -> bool:
        """Move every key under ``old`` by copying it and deleting the original.

        On an authorization failure, in the key listing or any later step,
        the object at ``new`` is deleted as a best-effort cleanup before the
        error is raised. Origin keys already moved are not restored.
        """
        try:
            self.execute(self.plan_rename(old, new))
        except PermissionDenied:
            self._cleanup(new)
            raise
        return True

    def _cleanup(self, path: str) -> None:
        key = to_key_exact(path)
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            log.warning("Cleanup of %r in bucket %r after failed rename did not succeed: %s", key, self._bucket, exc)

    # endregion
