import unittest
from unittest.mock import MagicMock, patch

import psycopg2

from hotel_cli.db import Database


class TestDatabase(unittest.TestCase):

    def setUp(self):
        patcher = patch("hotel_cli.db.psycopg2.connect")
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)

        self.conn = MagicMock()
        self.conn.closed = 0
        self.cur = self.conn.cursor.return_value
        self.connect.return_value = self.conn

        self.db = Database("hotel", "5432", "manager", password="pw", host="db.local")

    def test_connect_arguments(self):
        self.connect.assert_called_once_with(
            dbname="hotel", user="manager", password="pw", host="db.local", port="5432"
        )

    def test_from_config(self):
        Database.from_config({"dbname": "h2", "port": "6543", "user": "u"})
        self.connect.assert_called_with(
            dbname="h2", user="u", password="", host="localhost", port="6543"
        )

    def test_fetch_table_coerces_cells(self):
        self.cur.description = [("hotelid",), ("hotelname",)]
        self.cur.fetchall.return_value = [(1, None), (2, "Inn")]

        labels, rows = self.db.fetch_table("SELECT hotelID, hotelName FROM Hotel WHERE hotelID > %s", (0,))

        self.assertEqual(labels, ["hotelid", "hotelname"])
        self.assertEqual(rows, [["1", ""], ["2", "Inn"]])
        self.cur.execute.assert_called_once_with("SELECT hotelID, hotelName FROM Hotel WHERE hotelID > %s", (0,))
        self.cur.close.assert_called_once()

    def test_execute_query_counts_rows(self):
        self.cur.fetchall.return_value = [(1,), (2,), (3,)]
        self.assertEqual(self.db.execute_query("SELECT 1"), 3)

    def test_execute_query_and_return_result(self):
        self.cur.description = [("userid",), ("usertype",)]
        self.cur.fetchall.return_value = [(7, "admin")]
        self.assertEqual(self.db.execute_query_and_return_result("SELECT"), [["7", "admin"]])

    def test_execute_update_commits(self):
        self.cur.rowcount = 1
        self.assertEqual(self.db.execute_update("UPDATE Rooms SET price = %s", (10,)), 1)
        self.conn.commit.assert_called_once()

    def test_execute_returning(self):
        self.cur.fetchone.return_value = (42,)
        self.assertEqual(self.db.execute_returning("INSERT ... RETURNING userID"), 42)
        self.conn.commit.assert_called_once()

    def test_execute_returning_without_row(self):
        self.cur.fetchone.return_value = None
        self.assertIsNone(self.db.execute_returning("INSERT ... RETURNING userID"))

    def test_failed_statement_rolls_back(self):
        self.cur.execute.side_effect = psycopg2.ProgrammingError("relation does not exist")

        with self.assertLogs("hotel_cli.db", level="ERROR"):
            with self.assertRaises(psycopg2.ProgrammingError):
                self.db.execute_update("UPDATE nowhere SET x = 1")

        self.conn.rollback.assert_called_once()
        self.conn.commit.assert_not_called()

    def test_cleanup_closes_open_connection(self):
        self.db.cleanup()
        self.conn.close.assert_called_once()

    def test_cleanup_skips_closed_connection(self):
        self.conn.closed = 1
        self.db.cleanup()
        self.conn.close.assert_not_called()


if __name__ == "__main__":
    unittest.main()
