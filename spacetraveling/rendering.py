from pathlib import Path
from typing import NamedTuple, Optional
from urllib.parse import urlencode

from fastapi.templating import Jinja2Templates

from spacetraveling.schemas.blog import ListingPage, PageState, PostPage
from spacetraveling.services.content_parser import body_elements
from spacetraveling.settings import settings
from spacetraveling.utils import format_publication_date

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

LOAD_MORE_LABEL = "Carregar mais posts"
NEXT_POSTS_LABEL = "Próximos posts"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["publication_date"] = format_publication_date
templates.env.globals["body_elements"] = body_elements
templates.env.globals["site_title"] = settings.SITE_TITLE

POST_TEMPLATES = {
    PageState.READY: "post.html",
    PageState.LOADING: "post.html",
    PageState.NOT_FOUND: "not_found.html",
    PageState.ERROR: "error.html",
}


class MoreLink(NamedTuple):
    href: str
    label: str


def more_link(listing: ListingPage) -> Optional[MoreLink]:
    """
    Link that grows the live listing by one page. Once the listing holds
    the maximum number of pages it restarts from the continuation URL.
    """
    pagination = listing.pagination
    if not pagination.has_more:
        return None
    if listing.capped:
        href = f"/?{urlencode({'after': pagination.next_page})}"
        return MoreLink(href, NEXT_POSTS_LABEL)

    query = {"pages": listing.pages + 1}
    if listing.after:
        query = {"after": listing.after, **query}
    anchor = f"#post-{len(pagination.results) + 1}"
    return MoreLink(f"/?{urlencode(query)}{anchor}", LOAD_MORE_LABEL)


def render_listing(listing: ListingPage, more: Optional[MoreLink] = None) -> str:
    more = more or more_link(listing)
    return templates.get_template("home.html").render(listing=listing, more=more)


def render_post_page(page: PostPage) -> str:
    template = templates.get_template(POST_TEMPLATES[page.state])
    return template.render(
        page=page, message="Não foi possível carregar este post agora."
    )


def render_error(message: str) -> str:
    return templates.get_template("error.html").render(message=message)
