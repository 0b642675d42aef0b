import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from spacetraveling.cms.predicates import at, build_query
from spacetraveling.settings import Settings, settings

logger = logging.getLogger(__name__)


class CMSError(Exception):
    """Raised when the CMS cannot be reached or answers with an error."""


class ForeignURLError(CMSError):
    """Raised for continuation URLs that do not point at the CMS endpoint."""


class PrismicClient:
    """
    Thin read-only client for the Prismic REST API (v2).

    Every search resolves the master ref first, so freshly published
    content is visible on the next request.
    """

    def __init__(
        self,
        endpoint: str,
        access_token: str = "",
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self.http = http_client or httpx.Client(timeout=timeout)

    @property
    def search_url(self) -> str:
        return f"{self.endpoint}/documents/search"

    def close(self) -> None:
        self.http.close()

    def master_ref(self) -> str:
        api = self._get_json(self.endpoint, params=self._auth_params())
        for ref in api.get("refs", []):
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise CMSError(f"No master ref advertised by {self.endpoint}")

    def query(
        self,
        predicates: Iterable[str],
        *,
        fetch: Optional[Iterable[str]] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {"ref": self.master_ref(), "q": build_query(predicates)}
        if fetch:
            params["fetch"] = ",".join(fetch)
        if page_size:
            params["pageSize"] = str(page_size)
        params.update(self._auth_params())

        logger.debug(f"Querying CMS with {params['q']}")
        return self._get_json(self.search_url, params=params)

    def get_by_uid(
        self,
        document_type: str,
        uid: str,
        *,
        fetch: Optional[Iterable[str]] = None,
    ) -> Optional[Dict[str, Any]]:
        response = self.query([at(f"my.{document_type}.uid", uid)], fetch=fetch)
        results = response.get("results") or []
        return results[0] if results else None

    def get_url(self, url: str) -> Dict[str, Any]:
        """Follow a continuation URL handed out by the CMS."""
        if not self.owns_url(url):
            raise ForeignURLError(f"Refusing to follow URL outside the CMS: {url}")
        return self._get_json(url)

    def owns_url(self, url: str) -> bool:
        try:
            candidate = httpx.URL(url)
        except (httpx.InvalidURL, TypeError):
            return False
        base = httpx.URL(self.endpoint)
        base_path = base.path.rstrip("/")
        return (
            candidate.scheme == base.scheme
            and candidate.host == base.host
            and candidate.port == base.port
            and (
                candidate.path == base_path
                or candidate.path.startswith(base_path + "/")
            )
        )

    def _auth_params(self) -> Dict[str, str]:
        return {"access_token": self.access_token} if self.access_token else {}

    def _get_json(self, url: str, params: Optional[dict] = None) -> Dict[str, Any]:
        try:
            response = self.http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise CMSError(f"CMS request to {url} failed: {e}") from e
        except ValueError as e:
            raise CMSError(f"CMS returned invalid JSON from {url}: {e}") from e


def create_client(current_settings: Settings = None) -> PrismicClient:
    """Build the process-wide CMS client from settings."""
    current_settings = current_settings or settings
    return PrismicClient(
        current_settings.PRISMIC_API_ENDPOINT,
        access_token=current_settings.PRISMIC_ACCESS_TOKEN,
        timeout=current_settings.CMS_TIMEOUT_SECONDS,
    )
