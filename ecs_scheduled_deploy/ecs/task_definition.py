from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .errors import InvalidTaskDefinitionFileError

logger = logging.getLogger(__name__)

# Attributes returned by `DescribeTaskDefinition`, but not valid `RegisterTaskDefinition` inputs
IGNORED_TASK_DEFINITION_ATTRIBUTES: tuple[str, ...] = (
    "compatibilities",
    "taskDefinitionArn",
    "requiresAttributes",
    "revision",
    "status",
    "registeredAt",
    "deregisteredAt",
    "registeredBy",
)


def load_task_definition(path: Path, *, workspace: Path | None = None) -> dict[str, Any]:
    """Load the task definition document from a YAML or JSON file.

    Args:
        path: Path to the task definition file. Relative paths are resolved against `workspace`.
        workspace: Base directory for relative paths. Defaults to `$GITHUB_WORKSPACE`, or the current directory.

    Raises:
        InvalidTaskDefinitionFileError: If the file cannot be read or is not a mapping with string keys.
    """
    if not path.is_absolute():
        workspace = workspace or Path(os.environ.get("GITHUB_WORKSPACE", "."))
        path = workspace / path

    logger.debug("Loading task definition from [bold]%s[/bold]", path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as err:
        msg = f"Failed to read task definition file {str(path)!r}: {err}"
        raise InvalidTaskDefinitionFileError(msg) from err

    # JSON is a subset of YAML
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as err:
        msg = f"Failed to parse task definition file {str(path)!r}: {err}"
        raise InvalidTaskDefinitionFileError(msg) from err

    if not isinstance(document, dict):
        msg = f"Task definition must be a mapping, but got: {type(document)!r}"
        raise InvalidTaskDefinitionFileError(msg)

    # YAML 1.1 reads bare `yes`, `on`, numbers, etc. as non-string keys
    invalid_keys = [key for key in document if not isinstance(key, str)]
    if invalid_keys:
        msg = f"Task definition keys must be strings, but got: {invalid_keys!r}"
        raise InvalidTaskDefinitionFileError(msg)

    return document


def is_empty_value(value: Any) -> bool:
    """Check if the value is structurally empty.

    `None`, empty strings, empty sequences and empty mappings are empty.
    Falsy scalars such as `0` and `False` are meaningful values and NOT empty.
    """
    if value is None:
        return True

    if isinstance(value, str):
        return value == ""

    if isinstance(value, (Mapping, list, tuple)):
        return len(value) == 0

    return False


def prune_empty_values(value: Any) -> Any:
    """Recursively drop empty values, bottom-up.

    A mapping whose fields are all empty after pruning becomes empty itself, and so is dropped from its parent.
    """
    if isinstance(value, Mapping):
        pruned = {}
        for key, child in value.items():
            child = prune_empty_values(child)  # noqa: PLW2901
            if not is_empty_value(child):
                pruned[key] = child

        return pruned

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [child for child in map(prune_empty_values, value) if not is_empty_value(child)]

    return value


def remove_ignored_attributes(
    task_definition: dict[str, Any],
    *,
    ignored: Sequence[str] = IGNORED_TASK_DEFINITION_ATTRIBUTES,
) -> dict[str, Any]:
    """Remove top-level attributes that are only valid in API responses, warning for each of them."""
    task_definition = dict(task_definition)
    for attribute in ignored:
        if attribute not in task_definition:
            continue

        logger.warning(
            "⚠️ Ignoring property [bold]%r[/bold] in the task definition file."
            " This property is returned by the Amazon ECS DescribeTaskDefinition API"
            " and may be shown in the ECS console, but it is not a valid field when registering a new task definition."
            " This field can be safely removed from your task definition file.",
            attribute,
        )
        del task_definition[attribute]

    return task_definition


def sanitize_task_definition(
    task_definition: Mapping[str, Any],
    *,
    ignored: Sequence[str] = IGNORED_TASK_DEFINITION_ATTRIBUTES,
) -> dict[str, Any]:
    """Make the task definition document a valid `RegisterTaskDefinition` request.

    Empty values are pruned first, then the response-only attributes are removed.
    The given document is left untouched.
    """
    return remove_ignored_attributes(prune_empty_values(task_definition), ignored=ignored)
