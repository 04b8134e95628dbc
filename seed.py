import contextlib
import logging
import os
from db.session import SessionLocal, engine, init_db
from services.interview_repository import InterviewRepository
from dotenv import load_dotenv

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

# --- EVALUATION CATEGORIES EVERY NEW DATABASE STARTS WITH ---
DEFAULT_CATEGORIES = [
    "Communication",
    "Technical knowledge",
    "Problem solving",
    "Teamwork",
    "Motivation",
    "English",
]


def seed_database(repo: InterviewRepository, categories=DEFAULT_CATEGORIES) -> int:
    """
    Adds the default evaluation categories.
    Categories that already exist (by exact name) are left alone.
    Returns the number of categories created.
    """
    inserted = 0
    for name in categories:
        if repo.get_category_by_name(name) is not None:
            logger.warning(f"Category '{name}' already exists. Skipping.")
            continue
        repo.add_category(name)
        inserted += 1
    logger.info(f"Successfully saved {inserted} new categories.")
    return inserted


def main():
    load_dotenv()

    logger.info("Starting database seed...")
    init_db(engine)
    with contextlib.closing(InterviewRepository(SessionLocal())) as repo:
        seed_database(repo)
    logger.info("Database seeding complete!")


if __name__ == "__main__":
    main()
