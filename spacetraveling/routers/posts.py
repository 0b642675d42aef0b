import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from spacetraveling import dependencies as deps
from spacetraveling.cms.client import CMSError, ForeignURLError
from spacetraveling.schemas.blog import (
    DocumentDecodeError,
    PageState,
    PostPage,
    PostPagination,
)
from spacetraveling.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=PostPagination)
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """First page of post summaries and the continuation URL."""
    try:
        return service.get_home_pagination()
    except (CMSError, DocumentDecodeError) as e:
        logger.error(f"Failed to list posts: {e}")
        raise HTTPException(status_code=502, detail="Failed to retrieve posts")


@router.get("/posts/more", response_model=PostPagination)
def load_more_posts(
    next_page: str = Query(..., min_length=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Follow one continuation URL handed out by a previous listing."""
    try:
        return service.fetch_more(next_page)
    except ForeignURLError:
        raise HTTPException(
            status_code=400, detail="next_page must point at the CMS API"
        )
    except (CMSError, DocumentDecodeError) as e:
        logger.error(f"Failed to load more posts from {next_page}: {e}")
        raise HTTPException(status_code=502, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostPage)
def get_post(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Get a single post by slug, with its reading time."""
    page = service.get_post_page(slug)
    if page.state == PageState.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Post not found")
    if page.state == PageState.ERROR:
        raise HTTPException(status_code=502, detail="Failed to retrieve post")
    return page
