from __future__ import annotations

# Import the command modules to register them to the app
import ecs_scheduled_deploy.cli.deploy  # noqa: F401

from .cli.app import app


def entrypoint() -> None:  # noqa: D103  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    entrypoint()
