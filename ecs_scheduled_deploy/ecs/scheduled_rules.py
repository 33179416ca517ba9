from __future__ import annotations

import copy
import json
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any, Optional

import boto3
import botocore.exceptions
from pydantic import PositiveInt, validate_call

from .arn import is_ecs_cluster_arn, task_definition_family_key
from .errors import InvalidTaskDefinitionArnError, ProviderError, PutTargetsFailedError
from .session import create_client

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mypy_boto3_events import EventBridgeClient

logger = logging.getLogger(__name__)

# Target object:
# {
#     "Id": "Demo-Scheduled-Task",
#     "Arn": "arn:aws:ecs:<REGION>:<ACCOUNT ID>:cluster/<CLUSTER NAME>",
#     "RoleArn": "arn:aws:iam::<ACCOUNT ID>:role/ecsEventsRole",
#     "Input": '{"containerOverrides":[{"name":"Demo","command":["sleep"," 50"]}]}',
#     "EcsParameters": {
#         "TaskDefinitionArn": "arn:aws:ecs:<REGION>:<ACCOUNT ID>:task-definition/Demo:<REVISION>",
#         "TaskCount": 1,
#         "LaunchType": "EC2",
#     },
# }
_Target = dict[str, Any]


def filter_cluster_targets(targets: Iterable[_Target], cluster: str) -> list[_Target]:
    """Keep the targets that run on the ECS cluster of given name.

    Targets with missing or malformed ARNs are excluded rather than failing.
    """
    return [target for target in targets if is_ecs_cluster_arn(target.get("Arn") or "", cluster)]


def filter_task_family_targets(targets: Iterable[_Target], task_definition_arn: str) -> list[_Target]:
    """Keep the targets running any revision of the task family of given task definition.

    Raises:
        InvalidTaskDefinitionArnError: If the given ARN, or the task definition ARN of any target, is malformed.
    """
    family_key = task_definition_family_key(task_definition_arn)

    related = []
    for target in targets:
        arn = (target.get("EcsParameters") or {}).get("TaskDefinitionArn") or ""
        try:
            target_family_key = task_definition_family_key(arn)
        except InvalidTaskDefinitionArnError:
            raise InvalidTaskDefinitionArnError(arn, target_id=target.get("Id")) from None

        if target_family_key == family_key:
            related.append(target)

    return related


def rewrite_targets(targets: Iterable[_Target], task_definition_arn: str) -> list[_Target]:
    """Return copies of the targets pointing at given task definition."""
    rewritten = []
    for target in targets:
        target = copy.deepcopy(target)  # noqa: PLW2901
        target["EcsParameters"]["TaskDefinitionArn"] = task_definition_arn
        rewritten.append(target)

    return rewritten


class ScheduledRuleUpdater:
    """Updates EventBridge scheduled rules running ECS tasks to use a new task definition."""

    def __init__(self, cluster: str, *, session: boto3.session.Session | None = None) -> None:
        """Initialize instance.

        Args:
            cluster: Name of the ECS cluster the rule targets should run on.
            session: Boto3 session to use for AWS operations.
        """
        self.cluster = cluster
        self.session = session or boto3.session.Session()

    @validate_call
    def update_rules(
        self,
        task_definition_arn: str,
        *,
        rule_prefix: str = "",
        max_workers: Optional[PositiveInt] = None,
    ) -> list[str]:
        """Update all scheduled rules with given name prefix, concurrently.

        Args:
            task_definition_arn: The ARN of the new task definition.
            rule_prefix: Only rules with names starting with this prefix are updated.
            max_workers: Maximum number of rules processed at once. `None` processes all rules at once.

        Returns:
            Names of the rules updated.
        """
        events = create_client(self.session, "events")

        rule_names = self.list_rule_names(prefix=rule_prefix, events=events)
        if not rule_names:
            logger.info("No scheduled rules found with prefix [bold]%r[/bold].", rule_prefix)
            return []

        logger.info("Checking %d scheduled rule(s) for task definition updates.", len(rule_names))

        def process(rule_name: str) -> bool:
            return self._update_rule(events, rule_name, task_definition_arn)

        # Every rule is processed even if some fail; the first failure (in rule order) is re-raised afterwards
        with ThreadPoolExecutor(max_workers=max_workers or len(rule_names)) as pool:
            futures = {rule_name: pool.submit(process, rule_name) for rule_name in rule_names}
            wait(futures.values())

        return [rule_name for rule_name, future in futures.items() if future.result()]

    def list_rule_names(self, *, prefix: str = "", events: EventBridgeClient | None = None) -> list[str]:
        """List names of the rules starting with given prefix. Empty prefix matches all rules."""
        events = events or create_client(self.session, "events")
        try:
            rules = [rule for page in events.get_paginator("list_rules").paginate() for rule in page.get("Rules", [])]
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as err:
            msg = f"Failed to list scheduled rules: {err}"
            raise ProviderError(msg) from err

        return [rule["Name"] for rule in rules if rule["Name"].startswith(prefix)]

    @validate_call
    def update_rule(self, rule_name: str, task_definition_arn: str) -> bool:
        """Update the targets of a rule running older revisions of the task definition.

        Returns:
            Whether the rule has been updated.
        """
        return self._update_rule(create_client(self.session, "events"), rule_name, task_definition_arn)

    def _update_rule(self, events: EventBridgeClient, rule_name: str, task_definition_arn: str) -> bool:
        logger.debug("Looking up targets for rule [bold]%s[/bold]", rule_name)
        try:
            targets = [
                target
                for page in events.get_paginator("list_targets_by_rule").paginate(Rule=rule_name)
                for target in page.get("Targets", [])
            ]
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as err:
            msg = f"Failed to list targets of rule {rule_name!r}: {err}"
            raise ProviderError(msg) from err

        logger.debug("Rule targets for %s: %s", rule_name, _dumps(targets))
        if not targets:
            return False

        cluster_targets = filter_cluster_targets(targets, self.cluster)
        logger.debug("ECS %s targets for %s: %s", self.cluster, rule_name, _dumps(cluster_targets))

        task_targets = filter_task_family_targets(cluster_targets, task_definition_arn)
        logger.debug("Task targets for %s: %s", rule_name, _dumps(task_targets))
        if not task_targets:
            return False

        updated_targets = rewrite_targets(task_targets, task_definition_arn)
        logger.debug("Updated targets for %s: %s", rule_name, _dumps(updated_targets))
        try:
            response = events.put_targets(Rule=rule_name, Targets=updated_targets)  # type: ignore[arg-type]
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as err:
            msg = f"Failed to update targets of rule {rule_name!r}: {err}"
            raise ProviderError(msg) from err

        if response.get("FailedEntryCount"):
            msg = f"Failed to update targets of rule {rule_name!r}: {response.get('FailedEntries')!r}"
            raise PutTargetsFailedError(msg)

        logger.info(
            "✅ Updated %d target(s) of rule [bold]%s[/bold] to [yellow]%s[/yellow]",
            len(updated_targets),
            rule_name,
            task_definition_arn,
        )
        return True


def _dumps(obj: Any) -> str:
    return json.dumps(obj, default=str)
