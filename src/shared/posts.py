"""Post repository over the posts DynamoDB table.

Key design:
  Post:  PK=POST#<slug>  SK=METADATA

Every post carries collection="POST" for the collection-index GSI, which
backs the listings. The slug is the addressing key; `id` is an internal
identifier assigned on create that never changes, even when a post is
renamed.
"""

import logging
import uuid

from boto3.dynamodb.conditions import Key as DynamoKey
from botocore.exceptions import ClientError

from shared.db import build_update_expression, get_posts_table, now_iso, serialize_item
from shared.models import Post, PostDraft, PostListing

log = logging.getLogger(__name__)

COLLECTION = "POST"
COLLECTION_INDEX = "collection-index"


class PostNotFound(LookupError):
    def __init__(self, slug: str):
        super().__init__(f"Post '{slug}' does not exist")
        self.slug = slug


class SlugTaken(ValueError):
    def __init__(self, slug: str):
        super().__init__(f"Post with slug '{slug}' already exists")
        self.slug = slug


# ── Helpers ────────────────────────────────────────────────────────────────────

def _pk(slug: str) -> str:
    return f"POST#{slug}"


def _key(slug: str) -> dict:
    return {"PK": _pk(slug), "SK": "METADATA"}


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def _to_post(item: dict) -> Post:
    return Post(
        id=item["id"],
        slug=item["slug"],
        title=item["title"],
        markdown=item["markdown"],
    )


# ── Repository ─────────────────────────────────────────────────────────────────

class PostRepository:
    def __init__(self, table):
        self.table = table

    def list_listings(self) -> list[PostListing]:
        """All posts as {slug, title}, in index (PK) order."""
        query = {
            "IndexName": COLLECTION_INDEX,
            "KeyConditionExpression": DynamoKey("collection").eq(COLLECTION),
        }
        listings: list[PostListing] = []
        while True:
            response = self.table.query(**query)
            listings.extend(
                PostListing(slug=item["slug"], title=item["title"])
                for item in response.get("Items", [])
            )
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return listings
            query["ExclusiveStartKey"] = last_key

    def _get_item(self, slug: str) -> dict | None:
        return self.table.get_item(Key=_key(slug)).get("Item")

    def get(self, slug: str) -> Post | None:
        item = self._get_item(slug)
        return _to_post(item) if item else None

    def create(self, draft: PostDraft) -> Post:
        ts = now_iso()
        item = {
            **_key(draft.slug),
            "collection": COLLECTION,
            "id": uuid.uuid4().hex,
            "slug": draft.slug,
            "title": draft.title,
            "markdown": draft.markdown,
            "createdAt": ts,
            "updatedAt": ts,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression="attribute_not_exists(PK)")
        except ClientError as exc:
            if _error_code(exc) == "ConditionalCheckFailedException":
                raise SlugTaken(draft.slug) from exc
            raise

        log.info("Created post %s (%s)", draft.slug, item["id"])
        return _to_post(item)

    def update(self, original_slug: str, draft: PostDraft) -> Post:
        """
        Overwrite the post addressed by `original_slug` with `draft`.

        When the draft carries a different slug the post is moved: the new key
        is written and the old one deleted in a single transaction.
        """
        existing = self._get_item(original_slug)
        if not existing:
            raise PostNotFound(original_slug)

        if draft.slug == original_slug:
            return self._overwrite(existing, draft)
        return self._move(existing, draft)

    def _overwrite(self, existing: dict, draft: PostDraft) -> Post:
        data = {"title": draft.title, "markdown": draft.markdown, "updatedAt": now_iso()}
        expr, names, values = build_update_expression(data)
        try:
            self.table.update_item(
                Key=_key(draft.slug),
                UpdateExpression=expr,
                ConditionExpression="attribute_exists(PK)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as exc:
            if _error_code(exc) == "ConditionalCheckFailedException":
                raise PostNotFound(draft.slug) from exc
            raise

        log.info("Updated post %s", draft.slug)
        return _to_post({**existing, **data})

    def _move(self, existing: dict, draft: PostDraft) -> Post:
        if self._get_item(draft.slug):
            raise SlugTaken(draft.slug)

        item = {
            **existing,
            **_key(draft.slug),
            "slug": draft.slug,
            "title": draft.title,
            "markdown": draft.markdown,
            "updatedAt": now_iso(),
        }
        try:
            self.table.meta.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": serialize_item(item),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {
                        "Delete": {
                            "TableName": self.table.name,
                            "Key": serialize_item(_key(existing["slug"])),
                            "ConditionExpression": "attribute_exists(PK)",
                        }
                    },
                ]
            )
        except ClientError as exc:
            # Lost a race between the existence checks and the write.
            # Reasons line up with TransactItems: [0] put new key, [1] delete old key.
            if _error_code(exc) == "TransactionCanceledException":
                reasons = [r.get("Code") for r in exc.response.get("CancellationReasons", [])]
                if len(reasons) > 1 and reasons[1] == "ConditionalCheckFailed":
                    raise PostNotFound(existing["slug"]) from exc
                raise SlugTaken(draft.slug) from exc
            raise

        log.info("Moved post %s -> %s (%s)", existing["slug"], draft.slug, existing["id"])
        return _to_post(item)


def get_post_repository() -> PostRepository:
    """FastAPI dependency; tests override it to observe or fail repository calls."""
    return PostRepository(get_posts_table())
