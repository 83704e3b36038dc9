"""Post API router.

Endpoints:
- GET    /posts                      - List all posts (cached, paginated)
- GET    /posts/user/{username}      - List one author's posts (cached, paginated)
- POST   /posts                      - Create a post
- PATCH  /posts/{post_id}            - Edit a post (author only)
- DELETE /posts/{post_id}            - Delete a post (author or admin)

`page` is 1-indexed; invalid values read the first page instead of failing.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from scribe.api.deps import get_listing_service, get_post_service
from scribe.core.models import PaginatedPosts, PostSummary, PostWrite, Role, User
from scribe.security.deps import require_roles
from scribe.services.listing import PostListingService
from scribe.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])

PageParam = Annotated[
    str | None,
    Query(description="1-indexed page number; invalid values read page 1"),
]

any_member = require_roles(Role.USER, Role.AUTHOR, Role.ADMIN)
author_or_admin = require_roles(Role.AUTHOR, Role.ADMIN)


@router.get("", response_model=PaginatedPosts)
async def list_posts(
    page: PageParam = None,
    listings: PostListingService = Depends(get_listing_service),
) -> PaginatedPosts:
    """List all posts, newest first."""
    return await listings.list_posts(page)


@router.get("/user/{username}", response_model=PaginatedPosts)
async def list_user_posts(
    username: str,
    page: PageParam = None,
    listings: PostListingService = Depends(get_listing_service),
) -> PaginatedPosts:
    """List one author's posts, newest first."""
    return await listings.list_user_posts(username, page)


@router.post("", response_model=PostSummary, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostWrite,
    user: User = Depends(any_member),
    posts: PostService = Depends(get_post_service),
) -> PostSummary:
    return await posts.create_post(user, body.title, body.content)


@router.patch("/{post_id}", response_model=PostSummary)
async def edit_post(
    post_id: str,
    body: PostWrite,
    user: User = Depends(author_or_admin),
    posts: PostService = Depends(get_post_service),
) -> PostSummary:
    return await posts.edit_post(user, post_id, body.title, body.content)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    user: User = Depends(author_or_admin),
    posts: PostService = Depends(get_post_service),
) -> Response:
    await posts.delete_post(user, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
