import sys
import os
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from taskhub.db.session import engine, init_db
from taskhub.models.user import User, UserRole
from taskhub.core.security import get_password_hash


def create_initial_user():
    print("--- Initial Project Manager Creation ---")

    email = os.environ.get("FIRST_MANAGER_EMAIL", "manager@example.com")
    password = os.environ.get("FIRST_MANAGER_PASSWORD", "managerpassword")
    name = os.environ.get("FIRST_MANAGER_NAME", "First Manager")

    init_db()

    with Session(engine) as session:
        # Check if user already exists
        statement = select(User).where(User.email == email)
        user = session.exec(statement).first()

        if user:
            print(f"User with email {email} already exists (role: {user.role}).")
            return

        print(f"Creating project manager {email}...")
        db_user = User(
            email=email,
            password=get_password_hash(password),
            name=name,
            role=UserRole.PROJECT_MANAGER,
        )
        session.add(db_user)
        session.commit()
        print("Initial project manager created successfully!")
        print(f"Email: {email}")
        print(f"Password: {password}")
        print(f"Id: {db_user.id}")


if __name__ == "__main__":
    create_initial_user()
