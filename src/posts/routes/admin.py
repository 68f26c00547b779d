"""Admin routes for posts: the navigation shell plus the editor loader and action.

  GET  /posts/admin          listings for the navigation list
  GET  /posts/admin/new      empty draft
  GET  /posts/admin/{slug}   the post to edit
  POST /posts/admin/{slug}   create (slug == "new") or update, then redirect

The admin gate is the first dependency on every route here, including the
create path, so no form is decoded and no repository call is made for a
request without an admin session.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from shared.auth import require_admin_user
from shared.forms import RESERVED_SLUG, decode_post_form, submit_button
from shared.models import PostFormErrors
from shared.posts import PostNotFound, PostRepository, SlugTaken, get_post_repository

log = logging.getLogger(__name__)

router = APIRouter()

ADMIN_ROOT = "/posts/admin"
NEW_SLUG = RESERVED_SLUG


# ── Helpers ────────────────────────────────────────────────────────────────────

def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="This post does not exist")


# ── Routes ─────────────────────────────────────────────────────────────────────

@router.get(ADMIN_ROOT)
def admin_shell(
    _: str = Depends(require_admin_user),
    repo: PostRepository = Depends(get_post_repository),
):
    return {"posts": repo.list_listings(), "new_post": f"{ADMIN_ROOT}/{NEW_SLUG}"}


@router.get(ADMIN_ROOT + "/{slug}")
def load_post(
    slug: str,
    _: str = Depends(require_admin_user),
    repo: PostRepository = Depends(get_post_repository),
):
    if slug == NEW_SLUG:
        return {"post": None, "submit": submit_button(is_new_post=True)}

    post = repo.get(slug)
    if not post:
        raise _not_found()
    return {"post": post, "submit": submit_button(is_new_post=False)}


@router.post(ADMIN_ROOT + "/{slug}")
async def save_post(
    slug: str,
    request: Request,
    _: str = Depends(require_admin_user),
    repo: PostRepository = Depends(get_post_repository),
):
    form = await request.form()
    result = decode_post_form(form)

    if isinstance(result, PostFormErrors):
        log.info("Rejected post form for %s: %s", slug, result.model_dump(exclude_none=True))
        return result

    # The submitted "intent" only drives the button label; the route decides.
    try:
        if slug == NEW_SLUG:
            await run_in_threadpool(repo.create, result)
        else:
            await run_in_threadpool(repo.update, slug, result)
    except PostNotFound:
        raise _not_found()
    except SlugTaken as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    return RedirectResponse(ADMIN_ROOT, status_code=status.HTTP_303_SEE_OTHER)
