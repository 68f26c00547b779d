"""Public read routes: GET /posts and GET /posts/{slug}."""

from fastapi import APIRouter, Depends, HTTPException, status

from shared.posts import PostRepository, get_post_repository

router = APIRouter()


@router.get("/posts")
def list_posts(repo: PostRepository = Depends(get_post_repository)):
    return {"posts": repo.list_listings()}


@router.get("/posts/{slug}")
def get_post(slug: str, repo: PostRepository = Depends(get_post_repository)):
    post = repo.get(slug)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="This post does not exist")
    return post
