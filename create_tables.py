# create_tables.py
import os
import sys

from sqlalchemy.exc import SQLAlchemyError

from taskhub.database import Base, SessionLocal, engine
from taskhub.models.user import User
import taskhub.models  # noqa: F401
from taskhub.utils.security import hash_password

ADMIN_NAME = os.getenv("ADMIN_NAME", "System Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com").lower()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


def create_tables(reset: bool = False):
    """Create all tables; with `reset`, drop the existing ones first"""
    if reset:
        Base.metadata.drop_all(bind=engine)
        print("🗑️  Existing tables dropped")

    Base.metadata.create_all(bind=engine)
    print("✅ All tables created successfully!")

    create_default_admin()


def create_default_admin():
    """Create a default admin user"""
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == ADMIN_EMAIL).first():
            print("ℹ️  Admin user already exists")
            return

        db.add(User(
            name=ADMIN_NAME,
            email=ADMIN_EMAIL,
            hashed_password=hash_password(ADMIN_PASSWORD),
            role="admin",
        ))
        db.commit()
        print("✅ Default admin user created!")
        print(f"   Email: {ADMIN_EMAIL}")
        print(f"   Password: {ADMIN_PASSWORD}")
    finally:
        db.close()


if __name__ == "__main__":
    try:
        create_tables(reset="--reset" in sys.argv[1:])
    except SQLAlchemyError as e:
        print(f"❌ Error creating tables: {e}")
        sys.exit(1)
