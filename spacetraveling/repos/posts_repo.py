import logging
from typing import List, Optional

from spacetraveling.cms.predicates import at
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ("title", "subtitle", "author")
DETAIL_FIELDS = SUMMARY_FIELDS + ("banner", "content")


class PrismicPostsRepo:
    def __init__(self, client, document_type: str = None, page_size: int = None):
        self.client = client
        self.document_type = document_type or settings.PRISMIC_DOCUMENT_TYPE
        self.page_size = page_size or settings.POSTS_PAGE_SIZE

    def list_post_docs(self) -> dict:
        """First page of post summaries, raw as the CMS returns it."""
        return self.client.query(
            [at("document.type", self.document_type)],
            fetch=self._fields(SUMMARY_FIELDS),
            page_size=self.page_size,
        )

    def fetch_page(self, url: str) -> dict:
        return self.client.get_url(url)

    def get_post_doc(self, slug: str) -> Optional[dict]:
        return self.client.get_by_uid(
            self.document_type, slug, fetch=self._fields(DETAIL_FIELDS)
        )

    def list_slugs(self) -> List[str]:
        response = self.client.query(
            [at("document.type", self.document_type)],
            fetch=self._fields(SUMMARY_FIELDS),
        )
        slugs = [doc.get("uid") for doc in response.get("results", [])]
        while response.get("next_page"):
            response = self.fetch_page(response["next_page"])
            slugs.extend(doc.get("uid") for doc in response.get("results", []))

        logger.info(f"Found {len(slugs)} {self.document_type} documents")
        return [slug for slug in slugs if slug]

    def _fields(self, names) -> List[str]:
        return [f"{self.document_type}.{name}" for name in names]
