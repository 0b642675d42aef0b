import logging
from pathlib import Path
from typing import List

from spacetraveling.rendering import (
    LOAD_MORE_LABEL,
    STATIC_DIR,
    MoreLink,
    render_listing,
    render_post_page,
)
from spacetraveling.schemas.blog import ListingPage, PostPage
from spacetraveling.services.posts_service import ready_page

logger = logging.getLogger(__name__)

FALLBACK_PAGE = Path("post") / "_fallback.html"


def build_site(service, out_dir: Path) -> List[Path]:
    """
    Pre-render every listing page, every known post and the fallback shell
    into ``out_dir``. CMS and decode failures propagate and abort the build.
    """
    out_dir = Path(out_dir)
    written = _write_listing_pages(service, out_dir)

    for slug in service.get_static_paths():
        if not is_safe_slug(slug):
            logger.warning(f"Skipping {slug!r}: not usable as a path segment")
            continue
        post = service.get_post(slug)
        if post is None:
            logger.warning(f"Skipping {slug}: listed but not resolvable")
            continue
        written.append(
            _write(
                out_dir / "post" / slug / "index.html",
                render_post_page(ready_page(post)),
            )
        )

    fallback = render_post_page(PostPage.loading())
    written.append(_write(out_dir / FALLBACK_PAGE, fallback))
    written.extend(_copy_static(out_dir / "static"))

    logger.info(f"Wrote {len(written)} files to {out_dir}")
    return written


def listing_href(number: int) -> str:
    return "/" if number == 1 else f"/page/{number}/"


def listing_file(number: int) -> Path:
    if number == 1:
        return Path("index.html")
    return Path("page") / str(number) / "index.html"


def is_safe_slug(slug: str) -> bool:
    return bool(slug) and not any(part in slug for part in ("/", "\\", ".."))


def _write_listing_pages(service, out_dir: Path) -> List[Path]:
    """Page N holds the first N CMS pages; its load-more link points at page N+1."""
    state = service.get_home_pagination()
    number = 1
    written = []

    while True:
        more = None
        if state.has_more:
            anchor = f"#post-{len(state.results) + 1}"
            more = MoreLink(f"{listing_href(number + 1)}{anchor}", LOAD_MORE_LABEL)
        listing = ListingPage(pagination=state, pages=number)
        html = render_listing(listing, more)
        written.append(_write(out_dir / listing_file(number), html))

        if not state.has_more:
            return written
        state = service.load_more(state)
        number += 1


def _write(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


def _copy_static(target: Path) -> List[Path]:
    target.mkdir(parents=True, exist_ok=True)
    copied = []
    for asset in STATIC_DIR.iterdir():
        if asset.is_file():
            destination = target / asset.name
            destination.write_bytes(asset.read_bytes())
            copied.append(destination)
    return copied
