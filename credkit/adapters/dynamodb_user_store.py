"""
DynamoDB User Store - AWS-native credential storage.
"""

from typing import Optional, Dict, Any
from datetime import datetime

from botocore.exceptions import ClientError

from credkit.ports.user_store_port import UserStorePort
from credkit.domain.credential import Credential
from credkit.errors import DuplicateUsernameError
from credkit.adapters.dynamodb_common import (
    dynamodb_errors,
    is_conditional_check_failure,
    open_table,
)


class DynamoDBUserStore(UserStorePort):
    """
    DynamoDB-backed credential storage.

    Table schema:
        - Partition key: username (S)

    Inserts are conditional on ``attribute_not_exists(username)``, so the
    table itself rejects a second registration of the same name. Updates
    are conditional on the previously stored digest.
    """

    def __init__(
        self,
        table_name: str = "credkit-users",
        region_name: str = "us-east-1",
        table=None,
    ):
        """
        Initialize DynamoDB user store.

        Args:
            table_name: DynamoDB table name
            region_name: AWS region
            table: Pre-built Table resource (skips boto3 setup)
        """
        self._table_name = table_name
        self._table = table if table is not None else open_table(table_name, region_name)

    def find_by_username(self, username: str) -> Optional[Credential]:
        """Look up a credential in DynamoDB."""
        with dynamodb_errors("find_by_username"):
            response = self._table.get_item(
                Key={"username": username},
                ConsistentRead=True,
            )

        if "Item" not in response:
            return None

        return self._item_to_credential(response["Item"])

    def insert(self, credential: Credential) -> None:
        """Insert a credential unless the username is taken."""
        with dynamodb_errors("insert"):
            try:
                self._table.put_item(
                    Item=self._credential_to_item(credential),
                    ConditionExpression="attribute_not_exists(username)",
                )
            except ClientError as exc:
                if is_conditional_check_failure(exc):
                    raise DuplicateUsernameError(credential.username) from exc
                raise

    def update(self, credential: Credential, expected_digest: str) -> bool:
        """Overwrite a credential if its digest is still ``expected_digest``."""
        with dynamodb_errors("update"):
            try:
                self._table.put_item(
                    Item=self._credential_to_item(credential),
                    ConditionExpression="password_digest = :expected",
                    ExpressionAttributeValues={":expected": expected_digest},
                )
            except ClientError as exc:
                if is_conditional_check_failure(exc):
                    return False
                raise
        return True

    def _credential_to_item(self, credential: Credential) -> Dict[str, Any]:
        """Convert Credential to DynamoDB item."""
        item = {
            "username": credential.username,
            "password_digest": credential.password_digest,
            "created_at": credential.created_at.isoformat(),
        }
        if credential.updated_at:
            item["updated_at"] = credential.updated_at.isoformat()
        return item

    def _item_to_credential(self, item: Dict[str, Any]) -> Credential:
        """Convert DynamoDB item to Credential."""
        return Credential(
            username=item["username"],
            password_digest=item["password_digest"],
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]) if item.get("updated_at") else None,
        )
