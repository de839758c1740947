"""
Load catalog products from a JSON file. Run from project root:
  python -m app.scripts.seed_products products.json
The file holds an array of {"name", "price", "image", "description"} objects.
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import SessionLocal
from app.core.timeout import with_timeout
from app.schemas.products import ProductIn
from app.services.products import add_products

logger = logging.getLogger(__name__)

_products_adapter = TypeAdapter(list[ProductIn])


def load_products(path: Path) -> list[ProductIn]:
    """Read and validate the product array. Raises ValueError on bad input."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("Product file must contain a JSON array.")
    try:
        return _products_adapter.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise ValueError(f"Invalid product at {loc}: {first['msg']}") from e


async def seed(session_factory: async_sessionmaker[AsyncSession], products: list[ProductIn]) -> int:
    async with session_factory() as db:
        created = await with_timeout(add_products(db, products))
    return len(created)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Insert catalog products from a JSON file.")
    parser.add_argument("path", type=Path, help="JSON file with an array of products")
    args = parser.parse_args(argv)

    try:
        products = load_products(args.path)
    except (OSError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return 1
    if not products:
        print("No products to insert.")
        return 0

    count = asyncio.run(seed(SessionLocal, products))
    logger.info("Seeded products", extra={"count": count})
    print(f"Inserted {count} products.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
