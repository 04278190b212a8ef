"""
DynamoDB Session Store - AWS-native session token storage.
"""

from typing import Optional, Dict, Any, Iterator
from datetime import datetime

from boto3.dynamodb.conditions import Attr, Key

from credkit.ports.session_store_port import SessionStorePort
from credkit.domain.session import SessionToken
from credkit.adapters.dynamodb_common import dynamodb_errors, open_table


class DynamoDBSessionStore(SessionStorePort):
    """
    DynamoDB-backed session storage.

    Table schema:
        - Partition key: token_id (S)
        - GSI: username-index (username as partition key)
        - TTL attribute: expires_at_timestamp

    The TTL attribute is the token expiry plus ``expiry_grace`` seconds,
    so DynamoDB reaps tokens only after the service could report them
    as expired.
    """

    def __init__(
        self,
        table_name: str = "credkit-sessions",
        region_name: str = "us-east-1",
        expiry_grace: int = 300,
        table=None,
    ):
        """
        Initialize DynamoDB session store.

        Args:
            table_name: DynamoDB table name
            region_name: AWS region
            expiry_grace: Seconds a token outlives its expiry in the table
            table: Pre-built Table resource (skips boto3 setup)
        """
        self._table_name = table_name
        self._expiry_grace = expiry_grace
        self._table = table if table is not None else open_table(table_name, region_name)

    def put(self, token: SessionToken) -> None:
        """Store a token in DynamoDB."""
        with dynamodb_errors("put"):
            self._table.put_item(Item=self._token_to_item(token))

    def get(self, token_id: str) -> Optional[SessionToken]:
        """Get a token from DynamoDB."""
        with dynamodb_errors("get"):
            response = self._table.get_item(
                Key={"token_id": token_id},
                ConsistentRead=True,
            )

        if "Item" not in response:
            return None

        return self._item_to_token(response["Item"])

    def delete(self, token_id: str) -> bool:
        """Delete a token from DynamoDB."""
        with dynamodb_errors("delete"):
            response = self._table.delete_item(
                Key={"token_id": token_id},
                ReturnValues="ALL_OLD",
            )

        return "Attributes" in response

    def delete_by_username(self, username: str) -> int:
        """Delete all tokens of a user via the username index."""
        count = 0
        for item in self._paginate(
            "query",
            IndexName="username-index",
            KeyConditionExpression=Key("username").eq(username),
        ):
            if self.delete(item["token_id"]):
                count += 1
        return count

    def cleanup_expired(self, now: datetime) -> int:
        """Delete tokens expired at ``now`` that DynamoDB TTL has not reaped yet."""
        count = 0
        for item in self._paginate(
            "scan",
            FilterExpression=Attr("expires_at_timestamp").lte(int(now.timestamp()) + self._expiry_grace),
        ):
            token = self._item_to_token(item)
            if token.is_expired(now) and self.delete(token.token_id):
                count += 1
        return count

    def _paginate(self, method: str, **kwargs) -> Iterator[Dict[str, Any]]:
        """Yield items across DynamoDB result pages."""
        call = getattr(self._table, method)
        while True:
            with dynamodb_errors(method):
                response = call(**kwargs)

            yield from response.get("Items", [])

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def _token_to_item(self, token: SessionToken) -> Dict[str, Any]:
        """Convert SessionToken to DynamoDB item."""
        return {
            "token_id": token.token_id,
            "username": token.username,
            "issued_at": token.issued_at.isoformat(),
            "expires_at": token.expires_at.isoformat(),
            "expires_at_timestamp": int(token.expires_at.timestamp()) + self._expiry_grace,  # For TTL
        }

    def _item_to_token(self, item: Dict[str, Any]) -> SessionToken:
        """Convert DynamoDB item to SessionToken."""
        return SessionToken(
            token_id=item["token_id"],
            username=item["username"],
            issued_at=datetime.fromisoformat(item["issued_at"]),
            expires_at=datetime.fromisoformat(item["expires_at"]),
        )
