from __future__ import annotations

from typing import Optional


class DeployError(Exception):
    """Base exception for deployment failures."""


class InvalidTaskDefinitionArnError(DeployError):
    """Given string is not a task definition ARN."""

    def __init__(self, arn: str, *, target_id: Optional[str] = None) -> None:
        """Initialize instance.

        Args:
            arn: The offending ARN, as given.
            target_id: ID of the rule target embedding the ARN. `None` if the ARN is the newly registered one.
        """
        self.arn = arn
        self.target_id = target_id
        msg = f"Not task-definition ARN: {arn}"
        if target_id is not None:
            msg = f"{msg} (target {target_id!r})"

        super().__init__(msg)


class InvalidTaskDefinitionFileError(DeployError):
    """Task definition file could not be loaded."""


class ProviderError(DeployError):
    """AWS API call failed."""


class TaskDefinitionRegistrationError(ProviderError):
    """Failed to register the task definition."""


class PutTargetsFailedError(ProviderError):
    """Some of the rule targets were not updated."""
