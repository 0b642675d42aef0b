import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from spacetraveling.cms.client import create_client
from spacetraveling.rendering import STATIC_DIR
from spacetraveling.routers import pages, posts
from spacetraveling.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="spacetraveling", description="Blog front-end for a Prismic CMS")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cms_client = create_client()
    logger.info(f"CMS client ready for {settings.PRISMIC_API_ENDPOINT}")

    try:
        yield
    finally:
        app.state.cms_client.close()
        logger.info("CMS client closed")


app.router.lifespan_context = lifespan

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(pages.router)
app.include_router(posts.router)
