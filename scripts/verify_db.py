import sys
import os
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

# Add current directory to path so we can import taskhub
sys.path.append(os.getcwd())

from taskhub.core.config import settings
from taskhub.db.session import engine, init_db
from taskhub.models import Notification, Project, Task, User


def verify_database():
    print("--- Database Verification ---")
    print(f"Database: {settings.DATABASE_URL or 'sqlite:///./taskhub.db'}")
    try:
        # This will create tables if they don't exist
        print("Attempting to create tables...")
        init_db()
        print("Table creation/verification successful.")

        # Test session and a simple query per core table
        with Session(engine) as session:
            for model in (User, Project, Task, Notification):
                session.exec(select(model).limit(1)).first()
                print(f"  {model.__tablename__}: reachable")
            print("Database connection test: SUCCESS")

    except SQLAlchemyError as e:
        print("Database connection test: FAILED")
        print(f"Error: {e}")
        if "could not connect" in str(e).lower() or "connection refused" in str(e).lower():
            print("\nTIP: Check DATABASE_URL in .env and that the database server is running.")
        sys.exit(1)


if __name__ == "__main__":
    verify_database()
