"""DynamoDB resource helpers, update expression builder and item serializer."""

from datetime import datetime, timezone

import boto3
from boto3.dynamodb.types import TypeSerializer

from shared.config import AWS_REGION, DYNAMODB_KWARGS, POSTS_TABLE

_serializer = TypeSerializer()


def _dynamodb():
    return boto3.resource("dynamodb", region_name=AWS_REGION, **DYNAMODB_KWARGS)


def get_posts_table():
    return _dynamodb().Table(POSTS_TABLE)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_update_expression(data: dict) -> tuple[str, dict, dict]:
    """
    Build a DynamoDB SET expression from a flat dict of {field: value}.

    Returns (UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues).

    All attribute names are aliased via ExpressionAttributeNames to avoid
    conflicts with DynamoDB reserved words (e.g. title, slug).
    """
    parts: list[str] = []
    names: dict[str, str] = {}
    values: dict[str, object] = {}

    for i, (key, value) in enumerate(data.items()):
        name_ph = f"#k{i}"
        val_ph = f":v{i}"
        parts.append(f"{name_ph} = {val_ph}")
        names[name_ph] = key
        values[val_ph] = value

    return "SET " + ", ".join(parts), names, values


def serialize_item(item: dict) -> dict:
    """Convert a plain dict to the typed wire format the low-level client expects."""
    return {key: _serializer.serialize(value) for key, value in item.items()}
