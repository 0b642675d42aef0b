import logging
from typing import List, Optional

from pydantic import ValidationError

from spacetraveling.cms.client import CMSError
from spacetraveling.schemas.blog import (
    DocumentDecodeError,
    ListingPage,
    PageState,
    PostDetail,
    PostPage,
    PostPagination,
    PostSummary,
)
from spacetraveling.settings import settings
from spacetraveling.utils import (
    calculate_reading_time,
    format_publication_date,
    parse_publication_date,
)

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, max_pages: int = None):
        self.repo = repo
        self.max_pages = max_pages or settings.MAX_LISTING_PAGES

    def get_home_pagination(self) -> PostPagination:
        return parse_pagination(self.repo.list_post_docs())

    def fetch_more(self, next_page: str) -> PostPagination:
        return parse_pagination(self.repo.fetch_page(next_page))

    def load_more(self, state: PostPagination) -> PostPagination:
        """Append the next page to ``state`` and take over its continuation URL."""
        if not state.has_more:
            return state
        page = self.fetch_more(state.next_page)
        return PostPagination(
            next_page=page.next_page,
            results=[*state.results, *page.results],
        )

    def get_listing(self, pages: int = 1, after: Optional[str] = None) -> ListingPage:
        """
        Build the listing from the first page (or from the continuation URL
        ``after``) and load up to ``pages`` pages, at most ``max_pages``.
        """
        state = self.fetch_more(after) if after else self.get_home_pagination()
        wanted = max(1, min(pages, self.max_pages))
        loaded = 1
        failed = False

        while loaded < wanted and state.has_more:
            try:
                state = self.load_more(state)
            except (CMSError, DocumentDecodeError) as e:
                logger.warning(f"Failed to load page {loaded + 1} of posts: {e}")
                failed = True
                break
            loaded += 1

        return ListingPage(
            pagination=state,
            pages=loaded,
            after=after,
            capped=state.has_more and not failed and loaded >= self.max_pages,
            loadMoreFailed=failed,
        )

    def get_post(self, slug: str) -> Optional[PostDetail]:
        doc = self.repo.get_post_doc(slug)
        if not doc:
            return None
        return parse_post_detail(doc)

    def get_post_page(self, slug: str) -> PostPage:
        try:
            post = self.get_post(slug)
        except (CMSError, DocumentDecodeError) as e:
            logger.error(f"Failed to resolve post {slug}: {e}")
            return PostPage(state=PageState.ERROR)

        if post is None:
            logger.info(f"No post found for slug {slug}")
            return PostPage(state=PageState.NOT_FOUND)

        return ready_page(post)

    def get_static_paths(self) -> List[str]:
        return self.repo.list_slugs()


def ready_page(post: PostDetail) -> PostPage:
    return PostPage(
        state=PageState.READY,
        post=post,
        readingTime=calculate_reading_time(post.data.content),
    )


def parse_pagination(payload: dict) -> PostPagination:
    """Decode a search response into a page of display-ready summaries."""
    if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
        raise DocumentDecodeError("Search response has no results list")
    try:
        results = [parse_post_summary(doc) for doc in payload["results"]]
        return PostPagination(next_page=payload.get("next_page"), results=results)
    except ValidationError as e:
        raise DocumentDecodeError(f"Malformed search response: {e}") from e


def parse_post_summary(doc: dict) -> PostSummary:
    try:
        summary = PostSummary.model_validate(doc)
    except ValidationError as e:
        raise DocumentDecodeError(f"Malformed post summary: {e}") from e

    try:
        published = format_publication_date(summary.first_publication_date)
    except ValueError as e:
        raise DocumentDecodeError(f"Bad publication date on {summary.uid}: {e}") from e
    return summary.model_copy(update={"first_publication_date": published})


def parse_post_detail(doc: dict) -> PostDetail:
    try:
        post = PostDetail.model_validate(doc)
        parse_publication_date(post.first_publication_date)
    except ValidationError as e:
        raise DocumentDecodeError(f"Malformed post document: {e}") from e
    except ValueError as e:
        raise DocumentDecodeError(f"Bad publication date on {post.uid}: {e}") from e
    return post
