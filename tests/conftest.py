"""
Pytest configuration and shared fixtures for testing.
"""

import io
import json
import os
import zipfile

import boto3
import pytest
from moto import mock_aws
from rich.console import Console

from lambda_cleaner.core.aws_client import AWSClient
from lambda_cleaner.core.exceptions import DeleteError, VersionFetchError
from lambda_cleaner.core.inventory import FunctionDescriptor, VersionRecord
from lambda_cleaner.reporters.cli_reporter import CLIReporter

REGION = "us-east-1"


def _zip_code(body: str) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("handler.py", body)
    return buffer.getvalue()


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION


@pytest.fixture
def mock_aws_environment(aws_credentials):
    """Create a mocked AWS environment."""
    with mock_aws():
        yield


@pytest.fixture
def aws_client(mock_aws_environment):
    """Create an AWSClient instance for testing."""
    return AWSClient(region=REGION)


@pytest.fixture
def lambda_client(mock_aws_environment):
    """Create a boto3 Lambda client for setting up test resources."""
    return boto3.client("lambda", region_name=REGION)


@pytest.fixture
def lambda_role(mock_aws_environment):
    """Create an IAM role Lambda functions can be created with."""
    iam = boto3.client("iam", region_name=REGION)
    policy = {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": "lambda.amazonaws.com"},
                "Action": "sts:AssumeRole",
            }
        ],
    }
    response = iam.create_role(
        RoleName="lambda-cleaner-test",
        AssumeRolePolicyDocument=json.dumps(policy),
    )
    return response["Role"]["Arn"]


@pytest.fixture
def make_function(lambda_client, lambda_role):
    """
    Factory creating a Lambda function with ``versions`` published versions.

    The code changes before every publish so each call yields a new version.
    """

    def _make(name: str, versions: int = 0) -> str:
        lambda_client.create_function(
            FunctionName=name,
            Runtime="python3.12",
            Role=lambda_role,
            Handler="handler.handler",
            Code={"ZipFile": _zip_code("def handler(event, context):\n    return 0\n")},
        )
        for number in range(1, versions + 1):
            lambda_client.update_function_code(
                FunctionName=name,
                ZipFile=_zip_code(
                    f"def handler(event, context):\n    return {number}\n"
                ),
            )
            lambda_client.publish_version(FunctionName=name)
        return name

    return _make


# =============================================================================
# In-memory doubles for engine tests
# =============================================================================


class FakeInventory:
    """
    Scripted stand-in for LambdaInventory.

    ``functions`` maps a function name to its version strings. Version
    fetches for names in ``broken`` raise VersionFetchError; deletes of
    ``(name, version)`` pairs in ``undeletable`` raise DeleteError.
    """

    region = REGION

    def __init__(self, functions, broken=(), undeletable=(), list_error=None):
        self.functions = {
            name: list(versions) for name, versions in functions.items()
        }
        self.broken = set(broken)
        self.undeletable = set(undeletable)
        self.list_error = list_error
        self.delete_calls = []
        self.list_filters = []

    def list_functions(self, name_filter=None):
        self.list_filters.append(name_filter)
        if self.list_error is not None:
            raise self.list_error
        return [
            FunctionDescriptor(name=name, arn=f"arn:aws:lambda:{REGION}:123456789012:function:{name}")
            for name in self.functions
            if not name_filter or name == name_filter or name_filter in name
        ]

    def list_versions(self, function_name):
        if function_name in self.broken:
            raise VersionFetchError(
                f"Failed to list versions of {function_name}: Rate exceeded",
                function_name=function_name,
            )
        return [VersionRecord(version=v) for v in self.functions[function_name]]

    def delete_version(self, function_name, version):
        self.delete_calls.append((function_name, version))
        if (function_name, version) in self.undeletable:
            raise DeleteError(
                "Version is in use or being updated",
                function_name=function_name,
                version=version,
            )
        self.functions[function_name].remove(version)


class ScriptedConfirm:
    """Prompt double returning queued answers and recording questions."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, message):
        self.questions.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


class FakeClock:
    """Manual clock whose sleep advances time."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def output_buffer():
    return io.StringIO()


@pytest.fixture
def reporter(output_buffer):
    """CLIReporter writing plain text into a buffer."""
    console = Console(file=output_buffer, width=200, color_system=None)
    return CLIReporter(console)
