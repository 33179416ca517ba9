from __future__ import annotations

from .errors import InvalidTaskDefinitionArnError

# arn:aws:ecs:<REGION>:<ACCOUNT ID>:task-definition/<FAMILY>:<REVISION>
_TASK_DEFINITION_MARKER = "task-definition/"
_ARN_SEGMENTS = 6


def task_definition_family_key(arn: str) -> str:
    """Strip everything after the `task-definition/<family>` segment from the task definition ARN.

    Two ARNs of the same task family (differing in revision or any other trailing segments)
    share the same family key.

    Raises:
        InvalidTaskDefinitionArnError: If given string is not a task definition ARN.
    """
    segments = arn.split(":")
    if len(segments) < _ARN_SEGMENTS or not segments[5].startswith(_TASK_DEFINITION_MARKER):
        raise InvalidTaskDefinitionArnError(arn)

    return ":".join(segments[:_ARN_SEGMENTS])


def is_ecs_cluster_arn(arn: str, cluster: str) -> bool:
    """Check if the ARN refers to the ECS cluster of given name. Never raises on malformed ARNs."""
    # arn:aws:ecs:<REGION>:<ACCOUNT ID>:cluster/<CLUSTER NAME>
    segments = arn.split(":")
    if len(segments) < _ARN_SEGMENTS:
        return False

    return segments[2] == "ecs" and segments[5] == f"cluster/{cluster}"
