#!/usr/bin/env python3
"""
Database initialization script for the Gastro backend.

This script handles:
- Database creation (for PostgreSQL)
- Running Alembic migrations
- Optional demo data seeding (restaurants with opening hours and payment methods)

Usage:
    python scripts/init_db.py [--seed-data] [--check-only]
"""

import os
import sys
import argparse
import subprocess
from pathlib import Path
from urllib.parse import urlparse

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import engine, SessionLocal, session_scope
from sqlalchemy import create_engine, text
import logging

configure_logging("INFO")
logger = logging.getLogger(__name__)


# demo restaurants: (name, category, hours as (weekday, opens_at, closes_at), payment methods)
DEMO_RESTAURANTS = [
    (
        "Pizza do João",
        "Pizza",
        # tuesday to sunday 18:00-23:30, friday and saturday until 02:00
        [(0, 1080, 1410), (2, 1080, 1410), (3, 1080, 1410), (4, 1080, 1410),
         (5, 1080, 120), (6, 1080, 120)],
        ["PIX", "CREDIT_CARD"],
    ),
    (
        "Café Açaí & Cia",
        "Café",
        # monday to friday 07:00-11:00 and 14:00-19:00
        [(day, 420, 660) for day in range(1, 6)] + [(day, 840, 1140) for day in range(1, 6)],
        ["PIX", "DEBIT_CARD"],
    ),
]


def create_database_if_not_exists():
    """create db if it doesn't exist (PostgreSQL only)."""
    database_url = settings.DATABASE_URL

    if not database_url.startswith("postgresql"):
        logger.info("Database URL is not PostgreSQL, skipping database creation")
        return True

    try:
        parsed = urlparse(database_url)
        database_name = parsed.path[1:]  # Remove leading '/'

        # connect to the maintenance db, keeping credentials from the original url
        postgres_url = f"{parsed.scheme}://{parsed.netloc}/postgres"
        postgres_engine = create_engine(postgres_url, isolation_level="AUTOCOMMIT")

        with postgres_engine.connect() as conn:
            result = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
                {"db_name": database_name}
            )

            if result.fetchone() is None:
                logger.info(f"Creating database: {database_name}")
                conn.execute(text(f'CREATE DATABASE "{database_name}"'))
                logger.info(f"Database {database_name} created successfully")
            else:
                logger.info(f"Database {database_name} already exists")

        postgres_engine.dispose()
        return True

    except Exception as e:
        logger.error(f"Error creating database: {e}")
        return False


def run_migrations():
    """run Alembic migrations to create/update schema."""
    try:
        logger.info("Running Alembic migrations...")

        # alembic.ini lives in the project root
        os.chdir(project_root)

        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            capture_output=True,
            text=True,
            check=True
        )

        logger.info("Migrations completed successfully")
        logger.debug(f"Migration output: {result.stdout}")
        return True

    except subprocess.CalledProcessError as e:
        logger.error(f"Error running migrations: {e}")
        logger.error(f"Migration error output: {e.stderr}")
        return False


def delete_all_data():
    """delete all existing data from db tables in proper order."""
    from app.models.models import Restaurant, Address, OpeningHour, PaymentMethod

    logger.info("Deleting all existing data...")
    try:
        with session_scope() as db:
            # child tables first, then parent tables
            db.query(PaymentMethod).delete()
            db.query(OpeningHour).delete()
            db.query(Address).delete()
            db.query(Restaurant).delete()
        logger.info("All existing data deleted successfully")
        return True
    except Exception as e:
        logger.error(f"Error during data deletion: {e}")
        return False


def seed_initial_data():
    """replace all data with the demo restaurants."""
    from app.schemas.restaurants import RestaurantCreate, AddressCreate, OpeningHourIn
    from app.services.restaurants import service

    if not delete_all_data():
        logger.error("Failed to delete existing data")
        return False

    logger.info("Seeding demo restaurants...")
    db = SessionLocal()
    try:
        for name, category, hours, methods in DEMO_RESTAURANTS:
            restaurant = service.create_restaurant(db, RestaurantCreate(
                name=name,
                category=category,
                delivery_fee=599,
                min_order_value=2000,
                preparation_time_min=30,
                supports_pickup=True,
                supports_delivery=True,
                address=AddressCreate(
                    street="Rua Augusta", number="100", city="São Paulo",
                    state="SP", zip_code="01304-000",
                ),
            ))
            service.update_opening_hours(db, restaurant.id, [
                OpeningHourIn(weekday=weekday, opens_at=opens_at, closes_at=closes_at)
                for weekday, opens_at, closes_at in hours
            ])
            service.update_payment_methods(db, restaurant.id, methods)
            service.open_restaurant(db, restaurant.id)
            logger.info(f"Seeded restaurant '{restaurant.slug}'")
        return True
    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        return False
    finally:
        db.close()


def check_database_connection():
    """check if db connection works."""
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()

        logger.info("Database connection successful")
        return True

    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Initialize Gastro database")
    parser.add_argument(
        "--seed-data",
        action="store_true",
        help="Replace all data with demo restaurants (DESTRUCTIVE)"
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only check database connection, don't run migrations"
    )

    args = parser.parse_args()

    logger.info("Starting database initialization...")

    # step 1: create db if needed
    if not args.check_only and not create_database_if_not_exists():
        logger.error("Failed to create database")
        return False

    # step 2: check db connection
    if not check_database_connection():
        logger.error("Database connection failed")
        return False

    if args.check_only:
        logger.info("Database check completed successfully")
        return True

    # step 3: run migrations
    if not run_migrations():
        logger.error("Migration failed")
        return False

    # step 4: seed demo data if requested
    if args.seed_data:
        if not seed_initial_data():
            logger.error("Data seeding failed")
            return False

    logger.info("Database initialization completed successfully!")
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
