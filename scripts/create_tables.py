#!/usr/bin/env python3
"""
Create database tables for PixelTrack.
For a fresh local database; production schemas go through `alembic upgrade head`.
"""
import sys
from pathlib import Path

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.exc import SQLAlchemyError

from pixeltrack.core.database import engine, Base
from pixeltrack import models  # noqa: F401


def create_tables():
    """Create all tables in the database"""
    print("🔧 Creating database tables...")

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        print(f"❌ Error creating tables: {e}")
        sys.exit(1)

    print("✅ Tables created")
    print("\n📋 Tables:")
    for name in sorted(Base.metadata.tables):
        print(f"   - {name}")


if __name__ == "__main__":
    create_tables()
