import io

import pytest

from rucstore.catalog import ColMeta, DbMeta, TabMeta
from rucstore.defs import ColType
from rucstore.errors import ColumnNotFoundError, TableNotFoundError


def _sample_db():
    tab1 = TabMeta(
        "tab1",
        [
            ColMeta("tab1", "a", ColType.INT, 4, 0, True),
            ColMeta("tab1", "b", ColType.FLOAT, 4, 4, False),
            ColMeta("tab1", "c", ColType.STRING, 256, 8, False),
        ],
    )
    tab2 = TabMeta("tab2", [ColMeta("tab2", "b", ColType.FLOAT, 4, 0, True)])
    return DbMeta("db", {"tab2": tab2, "tab1": tab1})


def test_is_col_and_get_col():
    tab = _sample_db().get_table("tab1")
    assert tab.is_col("b") is True
    assert tab.is_col("z") is False
    col = tab.get_col("c")
    assert (col.name, col.type, col.len, col.offset) == ("c", ColType.STRING, 256, 8)


def test_get_col_missing_raises():
    tab = _sample_db().get_table("tab1")
    with pytest.raises(ColumnNotFoundError):
        tab.get_col("missing")


def test_get_col_returns_the_stored_column():
    db = _sample_db()
    db.get_table("tab1").get_col("b").index = True
    assert db.get_table("tab1").get_col("b").index is True


def test_is_table_and_get_table():
    db = _sample_db()
    assert db.is_table("tab1") is True
    assert db.is_table("tab3") is False
    assert db.get_table("tab2").name == "tab2"


def test_get_table_missing_raises():
    with pytest.raises(TableNotFoundError):
        _sample_db().get_table("nope")


def test_dump_load_round_trip():
    db = _sample_db()
    buf = io.StringIO()
    db.dump(buf)
    buf.seek(0)
    loaded = DbMeta.load(buf)
    assert loaded == db
    assert loaded.get_table("tab1").get_col("a").type is ColType.INT


def test_dump_layout():
    db = DbMeta("db", {"t": TabMeta("t", [ColMeta("t", "a", ColType.FLOAT, 4, 0, True)])})
    buf = io.StringIO()
    db.dump(buf)
    assert buf.getvalue() == "db\n1\nt\n1\nt a 1 4 0 1\n\n"


def test_dump_orders_tables_by_name():
    buf = io.StringIO()
    _sample_db().dump(buf)
    text = buf.getvalue()
    assert text.index("tab1\n") < text.index("tab2\n")


def test_empty_db_round_trip():
    buf = io.StringIO()
    DbMeta("empty").dump(buf)
    buf.seek(0)
    assert DbMeta.load(buf) == DbMeta("empty")


def test_load_truncated_raises():
    with pytest.raises(ValueError):
        DbMeta.load(io.StringIO("db\n2\ntab1\n"))