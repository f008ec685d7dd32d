from biztime.db.engine import DB_URL, create_db_engine
from biztime.db.schema import metadata


def main():
    engine = create_db_engine(DB_URL)
    metadata.drop_all(engine)
    metadata.create_all(engine)
    print(f"BizTime schema created on {engine.url}.")


if __name__ == "__main__":
    main()
