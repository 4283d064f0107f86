import logging

import psycopg2

from .table import cell_text

logger = logging.getLogger(__name__)


class Database:
    """A single psycopg2 connection plus the statement helpers the menus use.

    A failed statement rolls the connection back so the next one can run,
    then the driver error is re-raised to the caller.
    """

    def __init__(self, dbname, port, user, password="", host="localhost"):
        logger.info("Connecting to postgresql://%s:%s/%s as %s", host, port, dbname, user)
        self.conn = psycopg2.connect(
            dbname=dbname,
            user=user,
            password=password,
            host=host,
            port=port
        )

    @classmethod
    def from_config(cls, config):
        return cls(
            config["dbname"],
            config["port"],
            config["user"],
            password=config.get("password", ""),
            host=config.get("host", "localhost"),
        )

    def _run(self, sql, params):
        logger.debug("Executing: %s | params=%r", " ".join(sql.split()), params)
        cur = self.conn.cursor()
        try:
            cur.execute(sql, params)
        except psycopg2.Error as e:
            cur.close()
            self.conn.rollback()
            logger.error("Statement failed: %s", e)
            raise
        return cur

    def execute_update(self, sql, params=None):
        """Run an INSERT/UPDATE/DELETE, commit, and return the affected row count."""
        cur = self._run(sql, params)
        count = cur.rowcount
        cur.close()
        self.conn.commit()
        return count

    def execute_returning(self, sql, params=None):
        """Run a statement with a RETURNING clause, commit, and return its first value."""
        cur = self._run(sql, params)
        row = cur.fetchone()
        cur.close()
        self.conn.commit()
        if row is None:
            return None
        return row[0]

    def execute_query(self, sql, params=None):
        """Return the number of rows a query produces."""
        cur = self._run(sql, params)
        rows = cur.fetchall()
        cur.close()
        self.conn.commit()
        return len(rows)

    def execute_query_and_return_result(self, sql, params=None):
        """Return the query result as a list of records, each a list of text values."""
        return self.fetch_table(sql, params)[1]

    def fetch_table(self, sql, params=None):
        """Return ``(labels, rows)`` for a query with every cell coerced to text."""
        cur = self._run(sql, params)
        labels = [desc[0] for desc in cur.description] if cur.description else []
        rows = [[cell_text(value) for value in row] for row in cur.fetchall()] if cur.description else []
        cur.close()
        self.conn.commit()
        return labels, rows

    def cleanup(self):
        """Close the connection if it is open."""
        if self.conn is not None and not self.conn.closed:
            self.conn.close()
            logger.info("Disconnected from database")
