"""In-memory stand-ins for the database and the console."""


class FakeDatabase:
    """Answers queries from canned results keyed by the SQL text.

    ``counts`` maps SQL to the value of ``execute_query``; ``tables`` maps SQL
    to the ``(labels, rows)`` of ``fetch_table``. Unknown SQL yields 0 rows.
    """

    def __init__(self, counts=None, tables=None, returning=None, error=None):
        self.counts = counts or {}
        self.tables = tables or {}
        self.returning = returning
        self.error = error
        self.queries = []
        self.updates = []
        self.closed = False

    def _check(self):
        if self.error is not None:
            raise self.error

    def execute_query(self, sql, params=None):
        self._check()
        self.queries.append((sql, params))
        return self.counts.get(sql, 0)

    def fetch_table(self, sql, params=None):
        self._check()
        self.queries.append((sql, params))
        return self.tables.get(sql, ([], []))

    def execute_query_and_return_result(self, sql, params=None):
        return self.fetch_table(sql, params)[1]

    def execute_update(self, sql, params=None):
        self._check()
        self.updates.append((sql, params))
        return 1

    def execute_returning(self, sql, params=None):
        self._check()
        self.updates.append((sql, params))
        return self.returning

    def cleanup(self):
        self.closed = True


class ScriptedInput:
    """A ``read_line`` that replays answers and remembers the prompts it was given."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)
