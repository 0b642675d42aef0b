from fastapi import Depends, Request

from spacetraveling.cms.client import PrismicClient
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.posts_service import PostsService


def get_cms_client(request: Request) -> PrismicClient:
    """The client created in the app lifespan."""
    return request.app.state.cms_client


def get_posts_repo(client=Depends(get_cms_client)):
    return PrismicPostsRepo(client)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)
