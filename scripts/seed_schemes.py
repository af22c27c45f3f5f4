from schemeteller.db import Base, SessionLocal, engine
from schemeteller.engine.catalog import seed_catalog


def seed_schemes():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed_catalog(db)
        print(f"Seeded {created} schemes.")
    finally:
        db.close()


if __name__ == "__main__":
    seed_schemes()
