"""
Rebuild every pickup line document in the search index from the database.

Counters and starred/upvoted/downvoted sets are recomputed from the reactions table, so
this repairs any drift left by a failed document update or reaction script.

Requires: DATABASE_URL and ELASTICSEARCH_* in .env.
Run from apps/api: python scripts/reindex_pickup_lines.py [--log-level INFO]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from playbook.core import get_settings, PlaybookError
from playbook.db.session import async_session
from playbook.search import IndexManager, get_search_client
from playbook.search.reindex import reindex_pickup_lines


async def run_reindex() -> int:
    settings = get_settings()
    client = get_search_client(settings)
    try:
        await IndexManager(client, settings).ensure_indices()
        async with async_session() as session:
            return await reindex_pickup_lines(session, client, settings)
    finally:
        await client.close()


def main():
    parser = argparse.ArgumentParser(
        description="Rebuild pickup line search documents from the database."
    )
    parser.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)

    try:
        count = asyncio.run(run_reindex())
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(0)
    except PlaybookError as e:
        logger.error("Reindex failed: %s", e.message)
        sys.exit(1)
    logger.info("Done. %s pickup lines reindexed.", count)


if __name__ == "__main__":
    main()
