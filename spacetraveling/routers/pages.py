import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from spacetraveling import dependencies as deps
from spacetraveling.cms.client import CMSError, ForeignURLError
from spacetraveling.rendering import render_error, render_listing, render_post_page
from spacetraveling.schemas.blog import DocumentDecodeError, PageState
from spacetraveling.services.posts_service import PostsService
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_STATUS = {
    PageState.READY: 200,
    PageState.LOADING: 200,
    PageState.NOT_FOUND: 404,
    PageState.ERROR: 502,
}


def revalidate_headers() -> dict:
    return {
        "Cache-Control": (
            f"public, s-maxage={settings.REVALIDATE_SECONDS}, stale-while-revalidate"
        )
    }


@router.get("/", response_class=HTMLResponse)
def home(
    pages: int = Query(1, ge=1, description="Number of listing pages to show"),
    after: Optional[str] = Query(
        None, min_length=1, description="Continuation URL to start the listing from"
    ),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Post listing with a load-more link while the CMS has further pages."""
    try:
        listing = service.get_listing(pages, after=after)
    except ForeignURLError:
        return HTMLResponse(
            render_error("Endereço de paginação inválido."), status_code=400
        )
    except (CMSError, DocumentDecodeError) as e:
        logger.error(f"Failed to load posts listing: {e}")
        return HTMLResponse(
            render_error("Não foi possível carregar os posts agora."),
            status_code=502,
        )
    return HTMLResponse(render_listing(listing))


@router.get("/post/{slug}", response_class=HTMLResponse)
def post_page(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    page = service.get_post_page(slug)
    headers = revalidate_headers() if page.state == PageState.READY else None
    return HTMLResponse(
        render_post_page(page), status_code=PAGE_STATUS[page.state], headers=headers
    )
