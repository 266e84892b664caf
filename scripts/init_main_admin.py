"""
Script to initialize the main admin user.
Run once after the first account has registered.

The user with ID = MAIN_ADMIN_USER_ID gets the "admin" role, so the role
survives even if MAIN_ADMIN_USER_ID is later changed.
"""
import sys
import os

# Add the parent directory to the path so we can import mathquest modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mathquest.db.session import SessionLocal
from mathquest.core.config import MAIN_ADMIN_USER_ID
from mathquest.core.errors import NotFoundError
from mathquest.storage.sql import SqlStorage


def init_main_admin():
    """Give the main admin user the admin role."""
    db = SessionLocal()

    try:
        storage = SqlStorage(db)
        main_admin = storage.update_user(MAIN_ADMIN_USER_ID, role="admin")

        print(f"SUCCESS: User '{main_admin.username}' (ID: {main_admin.id}) is now an admin.")
        return True

    except NotFoundError:
        print(f"ERROR: User with ID {MAIN_ADMIN_USER_ID} not found!")
        print("Please register a user first, then run this script.")
        return False
    except Exception as e:
        db.rollback()
        print(f"ERROR: Failed to set main admin: {str(e)}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    print("Initializing main admin...")
    print(f"Main admin user ID constant: {MAIN_ADMIN_USER_ID}")
    print("-" * 50)

    if init_main_admin():
        print("-" * 50)
        print("Main admin initialization complete!")
    else:
        print("-" * 50)
        print("Main admin initialization failed!")
        sys.exit(1)
