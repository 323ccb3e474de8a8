# create_tables.py
from assetverse.database import Base, SessionLocal, engine, transaction, DATABASE_URL
from assetverse.models import User, Asset, AssetAssignment, Affiliation, AssetRequest, Package, Payment
from assetverse.services.container import Services
import sys

def create_tables(drop: bool = False):
    """Create all tables, optionally dropping existing ones first"""
    try:
        if drop:
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)
        print(f"✅ All tables created on {DATABASE_URL.split('@')[-1]}")

        seed_packages()

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise

def seed_packages():
    """Insert the default package catalogue if it is empty"""
    db = SessionLocal()
    try:
        with transaction(db):
            created = Services(db).packages.seed_packages()
        if created:
            print(f"✅ {created} packages seeded")
        else:
            print("ℹ️  Packages already exist")
    finally:
        db.close()

if __name__ == "__main__":
    create_tables(drop="--drop" in sys.argv)
