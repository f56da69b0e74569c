"""Script to seed the database with demo users, sample assets and one verification"""
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config import settings
from config.database import get_sync_url
from core.artifacts import build_qr_payload
from core.security import get_password_hash

# Import models and base
from db_base import Base
from db_models import Asset, Complaint, User, VerificationLog
from db_models.asset import utcnow

DATABASE_URL = get_sync_url(settings.DATABASE_URL)

USERS = [
    {
        "id": "u1",
        "name": "Admin User",
        "username": "admin123",
        "password": "admin@123",
        "role": "ADMIN",
        "designation": "System Administrator",
        "phone": "555-0101",
        "email": "admin@ams.com",
        "avatar_url": "https://picsum.photos/100/100?random=1",
    },
    {
        "id": "u2",
        "name": "John Staff",
        "username": "staff123",
        "password": "staff@123",
        "role": "STAFF",
        "designation": "IT Support",
        "phone": "555-0102",
        "email": "john@ams.com",
        "avatar_url": "https://picsum.photos/100/100?random=2",
    },
]

ASSETS = [
    {
        "id": "AST-000001",
        "name": "MacBook Pro M2",
        "category": "Laptop",
        "serial_number": "MBP2023-001",
        "status": "Active",
        "image_url": "https://picsum.photos/200/200?random=10",
        "purchase_date": date(2023, 1, 15),
        "created_date": date(2023, 1, 15),
        "location": "HQ - Floor 1",
        "is_qr_generated": True,
    },
    {
        "id": "AST-000002",
        "name": "Dell XPS 15",
        "category": "Laptop",
        "serial_number": "DXP15-998",
        "status": "Active",
        "image_url": "https://picsum.photos/200/200?random=11",
        "purchase_date": date(2023, 2, 10),
        "created_date": date(2023, 2, 10),
        "location": "HQ - Floor 2",
        "is_qr_generated": True,
    },
    {
        "id": "AST-000003",
        "name": "Canon EOS R5",
        "category": "Camera",
        "serial_number": "CAN-R5-112",
        "status": "Maintenance",
        "image_url": "https://picsum.photos/200/200?random=12",
        "purchase_date": date(2022, 11, 5),
        "created_date": date(2022, 11, 5),
        "location": "Studio A",
        "is_qr_generated": False,
    },
]


def create_tables():
    """Create all database tables"""
    print("Creating database tables...")
    engine = create_engine(DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    print("[OK] Tables created successfully")
    return engine


def seed_all(engine):
    Session = sessionmaker(bind=engine)

    with Session() as session:
        existing_count = session.query(Asset).count() + session.query(User).count()
        if existing_count > 0:
            print(f"Database already has {existing_count} users/assets")
            response = input("Do you want to clear and re-seed? (y/n): ")
            if response.lower() != 'y':
                print("Skipping seed")
                return
            # Children first: history rows reference assets
            session.query(VerificationLog).delete()
            session.query(Complaint).delete()
            session.query(Asset).delete()
            session.query(User).delete()
            session.commit()
            print("[OK] Cleared existing data")

        for data in USERS:
            fields = dict(data)
            password = fields.pop("password")
            session.add(User(hashed_password=get_password_hash(password), is_active=True, **fields))
            print(f"  Added user: {data['username']} ({data['role']})")

        for data in ASSETS:
            asset = Asset(added_by="Admin User", **data)
            if asset.is_qr_generated:
                asset.qr_data = build_qr_payload(asset.id, settings.PUBLIC_BASE_URL)
            session.add(asset)
            print(f"  Added asset: {asset.id} - {asset.name}")

        session.flush()

        # One verification so the dashboard has something to show
        verified_at = utcnow()
        session.add(VerificationLog(
            id="log-seed-1",
            asset_id="AST-000001",
            asset_name="MacBook Pro M2",
            verified_by="John Staff",
            timestamp=verified_at,
        ))
        first = session.get(Asset, "AST-000001")
        first.last_verified_date = verified_at
        first.verified_by = "John Staff"

        session.commit()
        print(f"\n[OK] Seeded {len(USERS)} users and {len(ASSETS)} assets")


if __name__ == "__main__":
    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Database: {DATABASE_URL}")
    print()

    engine = create_tables()
    seed_all(engine)
    print("\n" + "=" * 60)
    print("[OK] Database setup complete!")
    print("=" * 60)
