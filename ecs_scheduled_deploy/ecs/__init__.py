from .arn import task_definition_family_key
from .deployer import DeployResult, TaskDefinitionDeployer
from .errors import (
    DeployError,
    InvalidTaskDefinitionArnError,
    InvalidTaskDefinitionFileError,
    ProviderError,
    PutTargetsFailedError,
    TaskDefinitionRegistrationError,
)
from .scheduled_rules import ScheduledRuleUpdater, filter_cluster_targets, filter_task_family_targets, rewrite_targets
from .task_definition import IGNORED_TASK_DEFINITION_ATTRIBUTES, load_task_definition, sanitize_task_definition

__all__ = (
    "IGNORED_TASK_DEFINITION_ATTRIBUTES",
    "DeployError",
    "DeployResult",
    "InvalidTaskDefinitionArnError",
    "InvalidTaskDefinitionFileError",
    "ProviderError",
    "PutTargetsFailedError",
    "ScheduledRuleUpdater",
    "TaskDefinitionDeployer",
    "TaskDefinitionRegistrationError",
    "filter_cluster_targets",
    "filter_task_family_targets",
    "load_task_definition",
    "rewrite_targets",
    "sanitize_task_definition",
    "task_definition_family_key",
)
