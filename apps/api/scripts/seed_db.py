"""
Seed the database and search indices with users, tags, pickup lines and random reactions.

The seed file is JSON: {"requests": [{"user": {...}, "tags": [...], "pickup_lines": [...]}]},
with pickup line tags given by name. See scripts/seed_data.json.

Requires: DATABASE_URL and ELASTICSEARCH_* in .env.
Run from apps/api: python scripts/seed_db.py [--file scripts/seed_data.json] [--random-seed N]
"""
import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from playbook.core import PlaybookError, get_settings
from playbook.db.session import async_session
from playbook.repositories import PickupLineRepository, TagRepository, UserRepository
from playbook.search import ElasticSearchWrapper, IndexManager, SearchResultMapper, get_search_client
from playbook.services import PickupLineService, SeedFile, Seeder, TagService, UserService

DEFAULT_SEED_FILE = Path(__file__).resolve().parent / "seed_data.json"


async def run_seed(seed_file: Path, random_seed: int | None) -> int:
    data = SeedFile.model_validate_json(seed_file.read_text(encoding="utf-8"))
    settings = get_settings()
    client = get_search_client(settings)
    try:
        await IndexManager(client, settings).ensure_indices()
        async with async_session() as session:
            mapper = SearchResultMapper(TagRepository(session), PickupLineRepository(session))
            search = ElasticSearchWrapper(client, mapper, settings)
            seeder = Seeder(
                UserService(UserRepository(session), search),
                TagService(TagRepository(session), search),
                PickupLineService(PickupLineRepository(session), TagRepository(session), search),
                rng=random.Random(random_seed),
            )
            seeded = await seeder.seed(data)
    finally:
        await client.close()
    return len(seeded)


def main():
    parser = argparse.ArgumentParser(description="Seed users, tags, pickup lines and reactions.")
    parser.add_argument("--file", type=Path, default=DEFAULT_SEED_FILE, help="Seed JSON file")
    parser.add_argument("--random-seed", type=int, default=None, help="Seed for random reactions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)

    logger.info("Seeding from %s", args.file)
    try:
        count = asyncio.run(run_seed(args.file, args.random_seed))
    except PlaybookError as e:
        logger.error("Seed failed: %s", e.message)
        sys.exit(1)
    logger.info("Done. Seeded %s users.", count)


if __name__ == "__main__":
    main()
