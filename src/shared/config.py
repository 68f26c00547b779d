import os

ENV = os.getenv("ENV", "production")
AWS_REGION = os.getenv("AWS_REGION", "us-west-2")

POSTS_TABLE = os.getenv("DYNAMODB_POSTS_TABLE", "posts")

DYNAMODB_ENDPOINT = os.getenv("DYNAMODB_ENDPOINT")  # local only (http://localhost:8002)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
SESSION_SECRET = os.getenv("SESSION_SECRET", "")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "__session")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Injected into boto3 calls when running locally
DYNAMODB_KWARGS: dict = {}
if ENV == "local" and DYNAMODB_ENDPOINT:
    DYNAMODB_KWARGS["endpoint_url"] = DYNAMODB_ENDPOINT
