from __future__ import annotations

import importlib.util
import os
import unittest

from mini_dbal import DB, DriverError, ParameterKeyCollision, dsn

HAS_MYSQL_DRIVER = importlib.util.find_spec("pymysql") is not None


@unittest.skipUnless(HAS_MYSQL_DRIVER, "pymysql is not installed")
class DatabaseMySQLTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        host = os.getenv("MINI_DBAL_MYSQL_HOST", os.getenv("MYSQL_HOST", "localhost"))
        port = int(os.getenv("MINI_DBAL_MYSQL_PORT", os.getenv("MYSQL_PORT", "3306")))
        user = os.getenv("MINI_DBAL_MYSQL_USER", os.getenv("MYSQL_USER", "root"))
        password = os.getenv(
            "MINI_DBAL_MYSQL_PASSWORD",
            os.getenv("MYSQL_ROOT_PASSWORD", os.getenv("MYSQL_PASSWORD", "password")),
        )
        database = os.getenv(
            "MINI_DBAL_MYSQL_DATABASE", os.getenv("MYSQL_DATABASE", "mini_dbal_test")
        )
        try:
            cls.db = DB(
                dsn.mysql(database, host, port, "utf8mb4"),
                user,
                password,
                {"connect_timeout": 2},
            )
        except DriverError as exc:
            raise unittest.SkipTest(
                f"MySQL is not reachable at {host}:{port} ({exc.message})."
            ) from exc

    @classmethod
    def tearDownClass(cls) -> None:
        cls.db.close()

    def setUp(self) -> None:
        self.db.execute("DROP TABLE IF EXISTS `posts`;")
        self.db.execute("DROP TABLE IF EXISTS `authors`;")
        self.db.execute(
            "CREATE TABLE `authors` (`id` INT AUTO_INCREMENT PRIMARY KEY, `name` VARCHAR(255));"
        )
        self.db.execute(
            "CREATE TABLE `posts` ("
            " `id` INT AUTO_INCREMENT PRIMARY KEY,"
            " `author_id` INT,"
            " `title` VARCHAR(255),"
            " FOREIGN KEY (`author_id`) REFERENCES `authors`(`id`)"
            ") ENGINE=InnoDB;"
        )

    def test_crud_round_trip(self) -> None:
        self.db.insert("authors", {"name": "alice"})
        self.db.insert("authors", {"name": "bob%"})
        self.db.update("authors", {"name": "carol"}, "WHERE id = :id", {":id": 1})

        rows = self.db.fetch_all("authors", "WHERE name LIKE '%o%'", style="assoc")
        self.assertEqual(rows, [{"id": 1, "name": "carol"}, {"id": 2, "name": "bob%"}])

        with self.assertRaises(ParameterKeyCollision):
            self.db.update("authors", {"id": 5}, "WHERE id = :id", {"id": 1})

        self.db.delete("authors", "WHERE id = :id", {"id": 2})
        self.assertEqual(len(self.db.fetch_all("authors")), 1)

    def test_forced_truncate_of_referenced_table(self) -> None:
        self.db.insert("authors", {"name": "alice"})
        self.db.insert("posts", {"author_id": 1, "title": "hello"})

        with self.assertRaises(DriverError):
            self.db.truncate("authors")

        self.db.truncate("authors", force=True)
        self.assertEqual(self.db.fetch_all("authors"), [])
        checks = self.db.execute("SELECT @@SESSION.foreign_key_checks;").fetchone()
        self.assertEqual(checks[0], 1)


if __name__ == "__main__":
    unittest.main()
