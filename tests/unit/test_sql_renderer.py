import pytest

from adapters.sql_renderer import get_sql_dialect, is_insert


def test_postgres_uses_numbered_markers():
    dialect = get_sql_dialect("postgresql")
    sql = dialect.render("UPDATE movies SET title = ?, rating = ? WHERE id = ?", 3)
    assert sql == "UPDATE movies SET title = $1, rating = $2 WHERE id = $3"
    assert dialect.display_name == "PostgreSQL"


def test_postgres_insert_gets_returning_id():
    dialect = get_sql_dialect("postgres")
    sql = dialect.render("INSERT INTO movies (title) VALUES (?);", 1)
    assert sql == "INSERT INTO movies (title) VALUES ($1) RETURNING id"


def test_postgres_keeps_existing_returning_clause():
    dialect = get_sql_dialect("postgres")
    sql = dialect.render("INSERT INTO movies (title) VALUES (?) RETURNING id, title", 1)
    assert sql.count("RETURNING") == 1


def test_mysql_uses_repeated_format_marker_and_escapes_percent():
    dialect = get_sql_dialect("mysql")
    sql = dialect.render("SELECT * FROM movies WHERE title LIKE '50%' AND id = ?", 1)
    assert sql == "SELECT * FROM movies WHERE title LIKE '50%%' AND id = %s"
    assert "RETURNING" not in dialect.render("INSERT INTO movies (title) VALUES (?)", 1)


def test_sqlite_keeps_qmark():
    dialect = get_sql_dialect("sqlite")
    assert dialect.render("DELETE FROM movies WHERE id = ?", 1) == "DELETE FROM movies WHERE id = ?"


def test_markers_inside_quotes_are_not_parameters():
    dialect = get_sql_dialect("postgres")
    sql = dialect.render("SELECT 'why?' AS q, \"odd?col\" FROM movies WHERE id = ?", 1)
    assert sql == "SELECT 'why?' AS q, \"odd?col\" FROM movies WHERE id = $1"


def test_parameter_count_mismatch_is_rejected():
    dialect = get_sql_dialect("sqlite")
    with pytest.raises(ValueError, match="Expected 2 parameters, got 1"):
        dialect.render("UPDATE movies SET title = ? WHERE id = ?", 1)


def test_identity_column_ddl_per_engine():
    assert get_sql_dialect("postgres").identity_column_ddl == "id SERIAL PRIMARY KEY"
    assert get_sql_dialect("mysql").identity_column_ddl == "id INT AUTO_INCREMENT PRIMARY KEY"
    assert "AUTOINCREMENT" in get_sql_dialect("sqlite").identity_column_ddl


def test_unknown_engine():
    with pytest.raises(ValueError, match="Unsupported db_engine: oracle"):
        get_sql_dialect("oracle")


def test_is_insert():
    assert is_insert("  insert into movies values (1)")
    assert not is_insert("SELECT 'insert'")
