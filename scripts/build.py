import logging
import sys
from pathlib import Path

from spacetraveling.cms.client import create_client
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.static_builder import build_site

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    out_dir = Path(sys.argv[1] if len(sys.argv) > 1 else "out")
    client = create_client()
    try:
        build_site(PostsService(PrismicPostsRepo(client)), out_dir)
        logger.info("Static build completed successfully.")
    except Exception as e:
        logger.error(f"Static build failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        client.close()
