import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import config
from app.core.database import get_session_factory
from app.models.business import Business
from app.services.business import BusinessService
from app.services.store import seed_records

def create_tables(db_url: str):
    """Creates the 'businesses' table if it doesn't exist."""
    get_session_factory(db_url)
    print(f"Tables ready in {db_url}")

def seed(db_url: str) -> int:
    """Stores the built-in example records when the table is empty."""
    SessionLocal = get_session_factory(db_url)
    db = SessionLocal()
    try:
        if db.query(Business).count():
            print("Table already has data, skipping seed.")
            return 0
        code, content = BusinessService().replace_all(db, seed_records())
        if code != 200:
            print(f"Error seeding table: {content.get('error')}")
            return 0
        print(f"Seeded {content['count']} records.")
        return content['count']
    finally:
        db.close()

def main():
    """Main function to create the table and optionally seed it."""
    parser = argparse.ArgumentParser(description="Create the businesses table.")
    parser.add_argument("--db-url", default=config.db_url, help="SQLAlchemy database URL")
    parser.add_argument("--seed", action="store_true", help="Insert the example records into an empty table")
    args = parser.parse_args()

    try:
        create_tables(args.db_url)
        if args.seed:
            seed(args.db_url)
    except SQLAlchemyError as e:
        print(f"Error creating tables or connecting to the database: {e}")
    except Exception as e:
        print(f"An unexpected error occurred: {e}")

if __name__ == "__main__":
    main()
