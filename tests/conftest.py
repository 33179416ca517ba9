from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from moto import mock_aws

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS Credentials for Moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")

    # Intentionally malform `AWS_ENDPOINT_URL` environment variable to prevent running tests from the user environment
    # which highly likely malicious to the user's AWS account.
    monkeypatch.setenv("AWS_ENDPOINT_URL", "http://aws-not-configured:wrong-port")

    # Not to leak GitHub Actions environment into tests
    monkeypatch.delenv("GITHUB_WORKSPACE", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


# Moto
# ----------------------------------------------------------------------------
@pytest.fixture
def use_moto(monkeypatch: pytest.MonkeyPatch, aws_credentials: None) -> Iterator[None]:  # noqa: ARG001
    """Mock all AWS interactions."""
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    with mock_aws():
        yield
