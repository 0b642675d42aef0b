from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentDecodeError(Exception):
    """Raised when a CMS payload does not have the shape a post needs."""


class RichTextBlock(BaseModel):
    type: str
    text: str = ""
    spans: List[Dict[str, Any]] = Field(default_factory=list)


class ContentSection(BaseModel):
    heading: Optional[str] = None
    body: List[RichTextBlock] = Field(default_factory=list)


class Banner(BaseModel):
    url: Optional[str] = None
    alt: Optional[str] = None


class PostData(BaseModel):
    title: str
    subtitle: Optional[str] = None
    author: Optional[str] = None


class PostDetailData(PostData):
    banner: Banner = Field(default_factory=Banner)
    content: List[ContentSection] = Field(default_factory=list)


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None
    data: PostData


class PostDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None
    data: PostDetailData


class PostPagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return bool(self.next_page)


class PageState(str, Enum):
    READY = "ready"
    LOADING = "loading"
    NOT_FOUND = "not_found"
    ERROR = "error"


class PostPage(BaseModel):
    state: PageState
    post: Optional[PostDetail] = None
    readingTime: int = 0

    @classmethod
    def loading(cls) -> "PostPage":
        return cls(state=PageState.LOADING)


class ListingPage(BaseModel):
    pagination: PostPagination
    pages: int = 1
    after: Optional[str] = None  # continuation URL the listing started from
    capped: bool = False
    loadMoreFailed: bool = False
