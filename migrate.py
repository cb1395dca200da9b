#!/usr/bin/env python3
"""
Database management script.
Creates, drops and resets the schema and seeds sample listings.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List

from app.config import settings
from app.database import AsyncSessionLocal, create_tables, drop_tables, close_db_connection, utc_now
from app.models.property import PropertyStatus, PropertyType
from app.repositories.property import PropertyRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


SAMPLE_PROPERTIES: List[Dict[str, Any]] = [
    {
        "title": "Modern Loft",
        "description": "Open-plan loft with floor-to-ceiling windows in the warehouse district.",
        "price": 500000,
        "location": "Austin, TX",
        "type": PropertyType.CONDO,
        "bedrooms": 2,
        "bathrooms": 2,
        "area": 1200,
        "images": ["https://images.example.com/loft/1.jpg", "https://images.example.com/loft/2.jpg"],
        "amenities": ["Pool", "Gym", "Rooftop Deck"],
        "year_built": 2015,
        "featured": True,
    },
    {
        "title": "Craftsman Family Home",
        "description": "Renovated craftsman on a quiet street with a large fenced backyard.",
        "price": 875000,
        "location": "Portland, OR",
        "type": PropertyType.HOUSE,
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 2600,
        "images": ["https://images.example.com/craftsman/1.jpg"],
        "amenities": ["Garage", "Garden", "Fireplace"],
        "year_built": 1924,
        "featured": True,
    },
    {
        "title": "Downtown Studio Apartment",
        "description": "Efficient studio two blocks from the light rail with in-unit laundry.",
        "price": 289000,
        "location": "Denver, CO",
        "type": PropertyType.APARTMENT,
        "bedrooms": 1,
        "bathrooms": 1,
        "area": 540,
        "images": ["https://images.example.com/studio/1.jpg"],
        "amenities": ["Laundry", "Bike Storage"],
        "year_built": 2019,
    },
    {
        "title": "Lakeside Building Lot",
        "description": "Two wooded acres with lake frontage and utilities at the road.",
        "price": 145000,
        "location": "Lake Placid, NY",
        "type": PropertyType.LAND,
        "bedrooms": 1,
        "bathrooms": 1,
        "area": 87120,
        "images": [],
        "amenities": ["Lake Access"],
        "year_built": 2024,
        "status": PropertyStatus.PENDING,
    },
    {
        "title": "Main Street Retail Space",
        "description": "Ground-floor retail unit with display windows and a rear loading door.",
        "price": 1250000,
        "location": "Boise, ID",
        "type": PropertyType.COMMERCIAL,
        "bedrooms": 1,
        "bathrooms": 2,
        "area": 4100,
        "images": ["https://images.example.com/retail/1.jpg"],
        "amenities": ["Parking", "Loading Dock"],
        "year_built": 1998,
        "status": PropertyStatus.SOLD,
    },
]


class MigrationManager:
    """Manages the database schema and sample data."""

    async def create(self) -> None:
        """Create all tables that don't exist yet."""
        await create_tables()

    async def drop(self) -> None:
        """Drop all tables."""
        logger.warning("Dropping all tables - all data will be lost!")
        await drop_tables()

    async def seed(self) -> int:
        """
        Insert the sample listings unless listings already exist.

        Returns:
            Number of listings inserted
        """
        async with AsyncSessionLocal() as session:
            repo = PropertyRepository(session)
            if await repo.count() > 0:
                logger.info("Properties already present, skipping seed")
                return 0

            for sample in SAMPLE_PROPERTIES:
                now = utc_now()
                await repo.create({**sample, "created_at": now, "updated_at": now})

        logger.info(f"Seeded {len(SAMPLE_PROPERTIES)} sample properties")
        return len(SAMPLE_PROPERTIES)

    async def reset(self) -> None:
        """Drop, recreate and seed the database."""
        if settings.is_production:
            raise RuntimeError("Database reset is only allowed outside production")
        await self.drop()
        await self.create()
        await self.seed()
        logger.info("Database reset completed")


async def run(command: str) -> None:
    manager = MigrationManager()
    try:
        if command == "create":
            await manager.create()
        elif command == "drop":
            await manager.drop()
        elif command == "seed":
            await manager.create()
            await manager.seed()
        elif command == "reset":
            await manager.reset()
    finally:
        await close_db_connection()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Property Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    drop_parser = subparsers.add_parser("drop", help="Drop all tables (development/testing only)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping every table")

    subparsers.add_parser("seed", help="Create tables and insert sample listings")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed the database")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command in ("drop", "reset") and not args.confirm:
        print(f"Database {args.command} requires --confirm flag")
        return

    try:
        asyncio.run(run(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
