"""
Shared DynamoDB plumbing for the DynamoDB-backed stores.
"""

from contextlib import contextmanager
from typing import Iterator

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from credkit.errors import StorageUnavailable

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def open_table(table_name: str, region_name: str):
    """Return a boto3 Table resource."""
    dynamodb = boto3.resource("dynamodb", region_name=region_name)
    return dynamodb.Table(table_name)


def is_conditional_check_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


@contextmanager
def dynamodb_errors(operation: str) -> Iterator[None]:
    """Re-raise boto failures as StorageUnavailable."""
    try:
        yield
    except (BotoCoreError, ClientError) as exc:
        raise StorageUnavailable("dynamodb", operation) from exc
