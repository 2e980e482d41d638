from sqlmodel import Session
from app.db.session import engine, create_db_and_tables
from app.db.seed import seed_catalog

def seed():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        if seed_catalog(session):
            print("Successfully seeded products, shipping options and payment methods!")
        else:
            print("Database already contains products. Skipping seed.")

if __name__ == "__main__":
    seed()
