import unittest
from unittest import mock

from sqlalchemy import create_engine, text

from MSIConfig.config.database_config import DatabaseConfig
from MSIConfig.database.database import Database, create_db_engine, database_url


class TestDatabase(unittest.TestCase):
    def setUp(self):
        self.db_config = DatabaseConfig(host="db.example.org", database="sm", user="sm", password="secret")

    def test_database_url(self):
        url = database_url(self.db_config)
        self.assertEqual(url.drivername, "postgresql+psycopg2")
        self.assertEqual(url.host, "db.example.org")
        self.assertEqual(url.port, 5432)
        self.assertEqual(url.database, "sm")
        self.assertEqual(url.username, "sm")
        self.assertEqual(url.password, "secret")

    def test_engine_pool_options(self):
        with mock.patch("MSIConfig.database.database.create_engine") as create_engine_mock:
            create_db_engine(self.db_config)
        _, kwargs = create_engine_mock.call_args
        self.assertEqual(kwargs["pool_size"], 10)
        self.assertEqual(kwargs["max_overflow"], 0)
        self.assertEqual(kwargs["pool_recycle"], 30)
        self.assertEqual(kwargs["connect_args"], {"options": "-csearch_path=knex,public"})

    def test_search_path(self):
        db_config = DatabaseConfig(search_path="knex, public")
        self.assertEqual(db_config.schemas, ["knex", "public"])
        with mock.patch("MSIConfig.database.database.create_engine") as create_engine_mock:
            create_db_engine(db_config)
        _, kwargs = create_engine_mock.call_args
        self.assertEqual(kwargs["connect_args"], {"options": "-csearch_path=knex,public"})

    def test_connect_and_session(self):
        database = Database(self.db_config, engine=create_engine("sqlite://"))
        with database.connect() as connection:
            self.assertEqual(connection.execute(text("SELECT 1")).scalar(), 1)
        with database.session() as session:
            self.assertEqual(session.execute(text("SELECT 2")).scalar(), 2)
        database.dispose()

    def test_session_rolls_back_on_error(self):
        database = Database(self.db_config, engine=create_engine("sqlite://"))
        with self.assertRaises(RuntimeError):
            with database.session():
                raise RuntimeError("query failed")
        database.dispose()


if __name__ == "__main__":
    unittest.main()
