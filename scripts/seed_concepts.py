"""Load a concept catalog JSON file into the database (insert or replace by id).

Usage: python scripts/seed_concepts.py [scripts/data/sample_catalog.json]
"""
import asyncio
import json
import sys

sys.path.insert(0, ".")
from masterly.database import init_db, session_scope
from masterly.kernel.models import Concept


async def seed(path: str) -> None:
    with open(path, encoding="utf-8") as f:
        catalog = json.load(f)

    await init_db()
    async with session_scope() as session:
        for position, item in enumerate(catalog):
            concept = await session.get(Concept, item["id"])
            if concept is None:
                concept = Concept(id=item["id"])
                session.add(concept)
            concept.title = item["title"]
            concept.description = item.get("description")
            concept.prerequisites = [str(p) for p in item.get("prerequisites", [])]
            concept.position = position
    print(f"Seeded {len(catalog)} concept(s) from {path}")


if __name__ == "__main__":
    asyncio.run(seed(sys.argv[1] if len(sys.argv) > 1 else "scripts/data/sample_catalog.json"))
