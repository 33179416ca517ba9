from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

import boto3
import botocore.exceptions
from pydantic import PositiveInt, validate_call

from .errors import TaskDefinitionRegistrationError
from .scheduled_rules import ScheduledRuleUpdater
from .session import create_client
from .task_definition import sanitize_task_definition

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class DeployResult(NamedTuple):
    task_definition_arn: str
    updated_rules: list[str]


class TaskDefinitionDeployer:
    """Registers a task definition and rolls it out to the scheduled rules using its family."""

    def __init__(
        self,
        *,
        cluster: str = "default",
        rule_prefix: str = "",
        session: boto3.session.Session | None = None,
    ) -> None:
        """Initialize instance.

        Args:
            cluster: Name of the ECS cluster the scheduled tasks run on.
            rule_prefix: Only scheduled rules with names starting with this prefix are updated.
            session: Boto3 session to use for AWS operations.
        """
        self.cluster = cluster
        self.rule_prefix = rule_prefix
        self.session = session or boto3.session.Session()

    @validate_call
    def deploy(self, task_definition: dict[str, Any], *, max_workers: Optional[PositiveInt] = None) -> DeployResult:
        """Register the task definition, then update the scheduled rules to the new revision.

        The rules are not touched at all if the registration fails.

        Args:
            task_definition: The task definition document, as loaded from the file.
            max_workers: Maximum number of rules processed at once. `None` processes all rules at once.
        """
        task_definition_arn = self.register_task_definition(sanitize_task_definition(task_definition))

        updater = ScheduledRuleUpdater(self.cluster, session=self.session)
        updated_rules = updater.update_rules(
            task_definition_arn,
            rule_prefix=self.rule_prefix,
            max_workers=max_workers,
        )
        return DeployResult(task_definition_arn=task_definition_arn, updated_rules=updated_rules)

    def register_task_definition(self, task_definition: Mapping[str, Any]) -> str:
        """Register the (sanitized) task definition and return its ARN."""
        ecs = create_client(self.session, "ecs")

        logger.info("Registering the task definition")
        try:
            response = ecs.register_task_definition(**task_definition)
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as err:
            logger.debug("Task definition contents:\n%s", json.dumps(task_definition, indent=4, default=str))
            msg = f"Failed to register task definition in ECS: {err}"
            raise TaskDefinitionRegistrationError(msg) from err

        task_definition_arn = response["taskDefinition"]["taskDefinitionArn"]
        logger.info("✅ Registered task definition [yellow]%s[/yellow]", task_definition_arn)
        return task_definition_arn
