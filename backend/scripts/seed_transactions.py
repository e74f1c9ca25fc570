import argparse
import logging

from db.base import Base
from db.session import SessionLocal, engine
from services.seed_service import initialize_transactions


def main():
    parser = argparse.ArgumentParser(description="Import product transactions into the database.")
    parser.add_argument("--url", default=None, help="Seed JSON URL (defaults to SEED_DATA_URL)")
    parser.add_argument("--force", action="store_true", help="Upsert even when rows already exist")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        written = initialize_transactions(db, url=args.url, force=args.force)
        print(f"Seed complete. rows_written={written}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
