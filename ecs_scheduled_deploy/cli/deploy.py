from __future__ import annotations

import logging
import os
from pathlib import Path  # noqa: TC003
from typing import Optional

import typer
from rich import print_json

from ecs_scheduled_deploy.ecs import (
    DeployError,
    TaskDefinitionDeployer,
    load_task_definition,
    sanitize_task_definition,
)

from .app import app

logger = logging.getLogger(__name__)


@app.command()
def deploy(  # noqa: PLR0913
    ctx: typer.Context,
    *,
    task_definition: Path = typer.Option(  # noqa: B008
        ...,
        envvar="ECS_TASK_DEFINITION",
        help=(
            "Path to the task definition file, in YAML or JSON."
            " Relative paths are resolved against $GITHUB_WORKSPACE if set."
        ),
        show_default=False,
    ),
    cluster: str = typer.Option(
        "default",
        envvar="ECS_CLUSTER",
        help="The name of the ECS cluster the scheduled tasks run on.",
    ),
    rule_prefix: str = typer.Option(
        "",
        envvar="ECS_RULE_PREFIX",
        help="Only update the scheduled rules with names starting with this prefix.",
    ),
    max_concurrency: Optional[int] = typer.Option(
        None,
        min=1,
        help="Maximum number of scheduled rules updated at once. Unbounded by default.",
        show_default=False,
    ),
) -> None:
    """Register ECS task definition and update the scheduled rules to use it.

    Scheduled rule targets running an older revision of the same task family on the cluster
    are updated to the newly registered revision.
    """
    dry_run = ctx.meta.get("dry_run", False)

    try:
        document = load_task_definition(task_definition)
        if dry_run:
            logger.info("⚠️ Dry-run mode enabled. Will not register the task definition below.")
            print_json(data=sanitize_task_definition(document), indent=4, default=str)
            return

        deployer = TaskDefinitionDeployer(cluster=cluster, rule_prefix=rule_prefix)
        result = deployer.deploy(document, max_workers=max_concurrency)
    except DeployError as err:
        logger.error("❌ %s", err)  # noqa: TRY400
        raise typer.Exit(1) from None

    if result.updated_rules:
        logger.info("✅ Updated %d scheduled rule(s): %s", len(result.updated_rules), ", ".join(result.updated_rules))
    else:
        logger.info("💬 No scheduled rules to update.")

    _set_output("task-definition-arn", result.task_definition_arn)


def _set_output(name: str, value: str) -> None:
    """Print the output, also writing it to GitHub Actions output file if available."""
    typer.echo(f"{name}={value}")
    if output_file := os.environ.get("GITHUB_OUTPUT"):
        with Path(output_file).open("a", encoding="utf-8") as f:
            f.write(f"{name}={value}\n")
