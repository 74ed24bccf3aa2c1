"""Script to create the database tables, storage bucket and default settings."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal, init_db
from app.services.settings_domains import HomepageSettingsService
from app.services.storage import ObjectStorage


def init_storage():
    """Create tables, the bucket and an empty homepage document if missing."""
    init_db()

    storage = ObjectStorage()
    if storage.ensure_bucket():
        print(f"Bucket {storage.bucket} created successfully")
    else:
        print(f"Bucket {storage.bucket} already exists")

    db = SessionLocal()
    try:
        homepage = HomepageSettingsService(db)
        if homepage.store.get(homepage.key):
            print(f"Settings record {homepage.key} already exists")
            return
        homepage.save([])
        print(f"Settings record {homepage.key} created")
    finally:
        db.close()


if __name__ == "__main__":
    init_storage()
