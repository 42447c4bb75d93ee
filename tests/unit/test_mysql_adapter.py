from adapters.mysql import MySQLAdapter


class FakeCursor:
    def __init__(self, affected=0, rows=None, description=None, lastrowid=None):
        self.executed = []
        self._affected = affected
        self._rows = rows or []
        self.description = description
        self.lastrowid = lastrowid

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        return self._affected

    def fetchall(self):
        return self._rows


class FakeConn:
    def __init__(self, cursor):
        self.cursor_obj = cursor
        self.open = True

    def cursor(self):
        return self.cursor_obj

    def close(self):
        self.open = False


def _adapter_with(monkeypatch, cursor) -> MySQLAdapter:
    adapter = MySQLAdapter(source_config={"host": "db", "user": "root", "password": "pw"})
    monkeypatch.setattr(adapter, "_connect", lambda: FakeConn(cursor))
    return adapter


def test_insert_uses_format_markers_and_lastrowid(monkeypatch):
    cursor = FakeCursor(affected=1, lastrowid=11)
    adapter = _adapter_with(monkeypatch, cursor)

    result = adapter.execute("INSERT INTO movies (title, genre) VALUES (?, ?)", ["Up", "Animation"])

    assert cursor.executed == [("INSERT INTO movies (title, genre) VALUES (%s, %s)", ("Up", "Animation"))]
    assert result.inserted_id == 11
    assert result.affected_rows == 1


def test_select_rows_are_counted(monkeypatch):
    rows = [{"id": 2, "title": "B"}, {"id": 1, "title": "A"}]
    cursor = FakeCursor(affected=2, rows=rows, description=[("id",), ("title",)])
    adapter = _adapter_with(monkeypatch, cursor)

    result = adapter.execute("SELECT id, title FROM movies ORDER BY id DESC")

    assert result.rows == rows
    assert result.affected_rows == 2
    assert result.inserted_id is None


def test_delete_of_missing_row(monkeypatch):
    cursor = FakeCursor(affected=0)
    adapter = _adapter_with(monkeypatch, cursor)

    result = adapter.execute("DELETE FROM movies WHERE id = ?", [404])

    assert cursor.executed[0] == ("DELETE FROM movies WHERE id = %s", (404,))
    assert result.affected_rows == 0


def test_defaults_match_local_development(clean_env):
    params = MySQLAdapter()._db_params()
    assert params == {
        "host": "localhost",
        "port": 3306,
        "database": "movies_db",
        "user": "root",
        "password": "",
    }


def test_display_name():
    assert MySQLAdapter().display_name == "MySQL"
