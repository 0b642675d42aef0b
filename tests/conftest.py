from spacetraveling.cms.client import CMSError, ForeignURLError

API_ENDPOINT = "https://spacetraveling.cdn.prismic.io/api/v2"


def page_url(page: int) -> str:
    return f"{API_ENDPOINT}/documents/search?ref=master&page={page}&pageSize=1"


def words(count: int, word: str = "palavra") -> str:
    return " ".join([word] * count)


def make_summary_doc(
    uid: str,
    title: str = "Como utilizar Hooks",
    author: str = "Joseph Oliveira",
    published: str | None = "2021-03-15T19:25:28+0000",
    subtitle: str = "Pensando em sincronização em vez de ciclos de vida",
) -> dict:
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "prismicdesafio",
        "first_publication_date": published,
        "data": {"title": title, "subtitle": subtitle, "author": author},
    }


def make_detail_doc(uid: str, content=None, **kwargs) -> dict:
    doc = make_summary_doc(uid, **kwargs)
    doc["data"]["banner"] = {"url": f"https://images.prismic.io/{uid}.png"}
    doc["data"]["content"] = content if content is not None else []
    return doc


def make_section(heading: str, *blocks) -> dict:
    return {
        "heading": heading,
        "body": [{"type": kind, "text": text, "spans": []} for kind, text in blocks],
    }


def make_page(docs, next_page=None) -> dict:
    return {
        "page": 1,
        "results_per_page": len(docs),
        "next_page": next_page,
        "results": list(docs),
    }


class FakeCMSClient:
    """
    Minimal PrismicClient stand-in that records every call.
    """

    def __init__(self, first_page=None, pages=None, docs=None, failing_urls=()):
        self.first_page = first_page or make_page([])
        self.pages = pages or {}
        self.docs = docs or {}
        self.failing_urls = set(failing_urls)
        self.calls = []

    def query(self, predicates, *, fetch=None, page_size=None):
        self.calls.append(("query", list(predicates), list(fetch or []), page_size))
        return self.first_page

    def get_by_uid(self, document_type, uid, *, fetch=None):
        self.calls.append(("get_by_uid", document_type, uid, list(fetch or [])))
        return self.docs.get(uid)

    def get_url(self, url):
        self.calls.append(("get_url", url))
        if url in self.failing_urls:
            raise CMSError(f"boom fetching {url}")
        return self.pages[url]


class FakeRepo:
    """
    Minimal repo stand-in used in service and router tests.
    """

    def __init__(self, first_page=None, pages=None, docs=None, failing_urls=()):
        self.first_page = first_page or make_page([])
        self.pages = pages or {}
        self.docs = docs or {}
        self.failing_urls = set(failing_urls)
        self.fetched = []

    def list_post_docs(self):
        return self.first_page

    def fetch_page(self, url):
        self.fetched.append(url)
        if not url.startswith(f"{API_ENDPOINT}/"):
            raise ForeignURLError(url)
        if url in self.failing_urls:
            raise CMSError(f"boom fetching {url}")
        return self.pages[url]

    def get_post_doc(self, slug):
        return self.docs.get(slug)

    def list_slugs(self):
        return list(self.docs)


class BrokenRepo(FakeRepo):
    """
    Repo whose every CMS call fails.
    """

    def list_post_docs(self):
        raise CMSError("CMS unavailable")

    def get_post_doc(self, slug):
        raise CMSError("CMS unavailable")


def chain_repo(count: int, **kwargs) -> FakeRepo:
    """Repo serving ``count`` one-post pages linked by continuation URLs."""

    def page(number):
        next_page = page_url(number + 1) if number < count else None
        return make_page(
            [make_summary_doc(f"post-{number}", title=f"Post {number}")], next_page
        )

    pages = {page_url(number): page(number) for number in range(2, count + 1)}
    return FakeRepo(first_page=page(1), pages=pages, **kwargs)
