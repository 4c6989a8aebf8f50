"""
Database Seeder.

Run this script to populate the database with the hardcoded lab catalog
defined in data/hardcoded_labs.py.

Usage:
    python -m virtual_labs.scripts.db_seed_labs

This script uses its own sync engine since it runs as a CLI tool
outside of the application process.
"""

from fastapi.encoders import jsonable_encoder
from sqlmodel import Session, SQLModel, create_engine, select

from virtual_labs.config import settings
from virtual_labs.data.hardcoded_labs import HARDCODED_LABS
from virtual_labs.infrastructure.database.tables import LabDBModel
from virtual_labs.state.models import utcnow


def init_db_sync(engine):
    """Create tables if they do not exist."""
    SQLModel.metadata.create_all(engine)


def seed_labs(engine=None, labs=None):
    if engine is None:
        engine = create_engine(settings.DATABASE_URL, echo=False)
    if labs is None:
        labs = HARDCODED_LABS

    print("Initializing Database Connection...")

    init_db_sync(engine)

    with Session(engine) as session:
        print(f"Found {len(labs)} labs to seed.")

        for lab_id, lab in labs.items():
            print(f"Processing lab: {lab_id}")

            # Serialize the lab (with its engine config) to a JSON-compatible dict.
            lab_data_json = jsonable_encoder(lab)

            # Upsert logic: update existing records or insert new ones.
            statement = select(LabDBModel).where(LabDBModel.lab_id == lab_id)
            existing_lab = session.exec(statement).first()

            if existing_lab:
                print("--> Updating existing record.")
                existing_lab.title = lab.title
                existing_lab.lab_data = lab_data_json
                existing_lab.version += 1
                existing_lab.updated_at = utcnow()
                session.add(existing_lab)
            else:
                print("--> Creating new record.")
                session.add(LabDBModel(lab_id=lab_id, title=lab.title, lab_data=lab_data_json))

        session.commit()
        print("Labs seeding complete.")


if __name__ == "__main__":
    seed_labs()
