"""Decoding of the post editor form and the derived state of its submit control."""

from collections.abc import Mapping
from typing import Any, Optional

from shared.models import Intent, PostDraft, PostFormErrors, SubmitButton

# Checked in this order; every field is checked, there is no early exit.
_REQUIRED_FIELDS = {
    "title": "Title is required",
    "slug": "Slug is required",
    "markdown": "Markdown is required",
}

# Addresses the empty draft in the admin, so no post may take it.
RESERVED_SLUG = "new"


def _present(value: Any) -> bool:
    # Uploaded file parts and absent keys count as missing.
    return isinstance(value, str) and value != ""


def decode_post_form(form: Mapping[str, Any]) -> PostDraft | PostFormErrors:
    """
    Turn submitted form data into either a validated draft or a per-field error map.

    The caller branches on the returned type; nothing is raised for missing fields.
    """
    errors = {
        field: None if _present(form.get(field)) else message
        for field, message in _REQUIRED_FIELDS.items()
    }
    if form.get("slug") == RESERVED_SLUG:
        errors["slug"] = f"Slug \"{RESERVED_SLUG}\" is reserved"
    if any(errors.values()):
        return PostFormErrors(**errors)

    return PostDraft(
        title=form["title"],
        slug=form["slug"],
        markdown=form["markdown"],
    )


def submit_button(is_new_post: bool, pending_intent: Optional[str] = None) -> SubmitButton:
    """
    Label and state of the editor's submit control.

    `pending_intent` is the intent of a submission the browser still has in
    flight. It only drives the label; the server never serializes submissions.
    """
    intent: Intent = "create" if is_new_post else "update"
    in_flight = pending_intent == intent

    if is_new_post:
        label = "Creating..." if in_flight else "Create Post"
    else:
        label = "Updating..." if in_flight else "Update Post"

    return SubmitButton(
        label=label,
        intent=intent,
        disabled=pending_intent in ("create", "update"),
    )
