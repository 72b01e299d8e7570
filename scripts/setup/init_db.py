# scripts/setup/init_db.py
"""
Initialize database: creates all tables, optionally loads demo records.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
from datetime import datetime, timedelta

from sqlalchemy import inspect, text

from app.database import SessionLocal, create_tables, engine
from app.config import settings
from app.services.record_store import RecordStore

DEMO_CUSTOMERS = [
    {"name": "Maria Lopez", "phone": "(555) 201-3344", "vehicles": [("ABC1234", "Toyota", "Corolla", 2016)]},
    {"name": "John Smith", "phone": "555-123-4567", "vehicles": [("XYZ789", "Ford", "Focus", 2019),
                                                                ("JSM2020", "Honda", "Civic", 2020)]},
    {"name": "John Smith", "phone": "555-987-6543", "vehicles": [("KLM4455", "Mazda", "CX-5", 2021)]},
]


def seed(store: RecordStore):
    if store.list_customers():
        print("ℹ️  Customers already present, skipping demo seed")
        return
    for entry in DEMO_CUSTOMERS:
        customer = store.create_customer(name=entry["name"], phone=entry["phone"])
        for plate, make, model, year in entry["vehicles"]:
            vehicle = store.create_vehicle(customer_id=customer.id, plate_number=plate,
                                           make=make, model=model, year=year)
            store.create_service(vehicle_id=vehicle.id, customer_id=customer.id,
                                 service_date=datetime.utcnow() - timedelta(days=30),
                                 work_performed="Oil and filter change",
                                 labor_cost=40, parts_cost=35, total_cost=75)
    print(f"✅ Seeded {len(DEMO_CUSTOMERS)} demo customers")


def main():
    parser = argparse.ArgumentParser(description="Create workshop tables")
    parser.add_argument("--seed", action="store_true", help="Load a few demo customers and vehicles")
    args = parser.parse_args()

    print("🗄️  Workshop DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"✅ Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed:
        db = SessionLocal()
        try:
            seed(RecordStore(db))
        finally:
            db.close()

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
