# scripts/setup/init_db.py
"""
Initialize database — creates all tables and seeds the configured parking lots and courts.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.services.court_service import list_courts
from app.services.parking_service import get_or_create_lot
from sqlalchemy import inspect, text


def main():
    print("🗄️  Park Pulse DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    print("✅ All tables created")

    with SessionLocal() as db:
        for lot_id in settings.PARKING_LOTS:
            lot = get_or_create_lot(db, lot_id)
            print(f"   🅿️  {lot.lot_id}: {lot.name} ({lot.total_spots} spots)")
        db.commit()
        courts = list_courts(db)
        print(f"   🏀 {len(courts)} courts ready")

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
