"""
Shared pytest fixtures.

Environment variables are set at module level, before any src/ imports,
so config.py reads the correct test values when fixtures are first evaluated.
"""

import os

# Must be set before any shared.* imports.
# Use setdefault so externally-passed env vars (integration tests) take precedence.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_REGION", "us-west-2")
os.environ.setdefault("DYNAMODB_POSTS_TABLE", "posts")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("SESSION_SECRET", "test-secret-32-chars-exactly-ok!")

from datetime import datetime, timedelta, timezone

import boto3
import pytest
from fastapi.testclient import TestClient
from jose import jwt
from moto import mock_aws

TEST_SECRET = "test-secret-32-chars-exactly-ok!"


# ── Token helper ────────────────────────────────────────────────────────────────

def make_token(
    email: str = "admin@example.com",
    secret: str = TEST_SECRET,
    expired: bool = False,
) -> str:
    exp = datetime.now(timezone.utc) + (
        timedelta(seconds=-1) if expired else timedelta(hours=1)
    )
    return jwt.encode({"email": email, "exp": exp}, secret, algorithm="HS256")


def auth_headers(email: str = "admin@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


# ── AWS fixtures ────────────────────────────────────────────────────────────────

def create_posts_table(ddb) -> None:
    ddb.create_table(
        TableName="posts",
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
            {"AttributeName": "collection", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "collection-index",
                "KeySchema": [
                    {"AttributeName": "collection", "KeyType": "HASH"},
                    {"AttributeName": "PK", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        BillingMode="PAY_PER_REQUEST",
    )


@pytest.fixture()
def aws_env():
    """Start moto mock, create the posts table, yield, teardown."""
    with mock_aws():
        create_posts_table(boto3.client("dynamodb", region_name="us-west-2"))
        yield


@pytest.fixture()
def posts_table(aws_env):
    return boto3.resource("dynamodb", region_name="us-west-2").Table("posts")


@pytest.fixture()
def repo(posts_table):
    from shared.posts import PostRepository  # noqa: PLC0415

    return PostRepository(posts_table)


@pytest.fixture()
def client(aws_env):
    """FastAPI TestClient with mocked AWS. Import app inside fixture so boto3
    clients are always created inside the mock_aws context."""
    from posts.handler import app  # noqa: PLC0415

    yield TestClient(app, raise_server_exceptions=True)
    app.dependency_overrides.clear()
