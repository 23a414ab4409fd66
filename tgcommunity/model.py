import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar, Type, Any, get_type_hints

from .errors import InternalError
from .utils import in_id_range

T = TypeVar('T')


class Model:
    """
        Plain record with typed class attributes.

        Every annotated attribute is a column: `int` -> INTEGER, `float` -> REAL,
        everything else TEXT. The same class is used by the memory stores
        (as a value object) and by the SQLite stores (as a table).

        __unique__ lists columns that get a UNIQUE index in SQLite.
    """
    __unique__: tuple = ()

    id: int = None
    created_at: str = ""

    def __init__(self, data: dict[str, Any] = None):
        if data:
            for k, v in data.items():
                if hasattr(self, k): setattr(self, k, v)

    def to_dict(self) -> dict:
        return {k: getattr(self, k) for k in self._props(self.__class__)}

    def copy(self: T) -> T:
        return self.__class__(self.to_dict())

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()!r})"

    @staticmethod
    def _props(cls: type) -> dict[str, str]:
        props = {}
        hints = get_type_hints(cls) if hasattr(cls, '__annotations__') else {}
        for name, typ in hints.items():
            if name.startswith('_'): continue
            sql_type = 'TEXT'
            if typ == int: sql_type = 'INTEGER'
            elif typ == float: sql_type = 'REAL'
            props[name] = sql_type
        return props

    @classmethod
    def get_tablename(cls) -> str: return cls.__name__.lower()


class Database:
    """
        One SQLite connection plus the lock that serialises every statement on it.

        sqlite3.Error never leaves this class; it is re-raised as InternalError
        so the HTTP layer answers with a generic 500.
    """

    def __init__(self, db_path: str | Path = 'app.sqlite'):
        self.path = str(db_path)
        if self.path != ':memory:':
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self.lock = threading.RLock()
        self._batch = False
        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
        except sqlite3.Error as e:
            raise InternalError(f"cannot open database {self.path}") from e
        self._conn.row_factory = lambda c, r: dict(zip([col[0] for col in c.description], r))

    def close(self) -> None:
        with self.lock:
            self._conn.close()

    def _run(self, sql: str, args: list = None, commit: bool = False) -> sqlite3.Cursor:
        with self.lock:
            try:
                cur = self._conn.execute(sql, args or [])
                if commit and not self._batch: self._conn.commit()
                return cur
            except sqlite3.Error as e:
                self._conn.rollback()
                raise InternalError(str(e)) from e

    @contextmanager
    def batch(self):
        """Statements inside commit together at the end, or roll back together."""
        with self.lock:
            self._batch = True
            try:
                yield self
                self._conn.commit()
            except BaseException:
                self._conn.rollback()
                raise
            finally:
                self._batch = False

    def _fetchall(self, sql: str, args: list = None) -> list[dict]:
        with self.lock:
            try:
                return self._conn.execute(sql, args or []).fetchall()
            except sqlite3.Error as e:
                raise InternalError(str(e)) from e

    def _fetchone(self, sql: str, args: list = None) -> dict | None:
        rows = self._fetchall(sql, args)
        return rows[0] if rows else None

    # =========================================================================
    # Schema
    # =========================================================================
    def update_table(self, cls: Type[Model]) -> None:
        table = cls.get_tablename()
        props = Model._props(cls)
        cols = [f"{n} {t}" + (' PRIMARY KEY AUTOINCREMENT' if n == 'id' else '') for n, t in props.items()]
        with self.lock:
            self._run(f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(cols)})")
            existing = {r['name'] for r in self._fetchall(f"PRAGMA table_info({table})")}
            for name, typ in props.items():
                if name not in existing:
                    self._run(f"ALTER TABLE {table} ADD COLUMN {name} {typ}")
            for col in cls.__unique__:
                self._run(f"CREATE UNIQUE INDEX IF NOT EXISTS {table}_{col}_uniq ON {table} ({col})")
            self._conn.commit()

    # =========================================================================
    # Rows
    # =========================================================================
    def insert(self, obj: Model) -> Model:
        """INSERT obj; an explicit id is kept, otherwise the new rowid is assigned."""
        props = Model._props(obj.__class__)
        data = {k: getattr(obj, k) for k in props if k != 'id' or obj.id is not None}
        cols = ', '.join(data.keys())
        placeholders = ', '.join(['?'] * len(data))
        cur = self._run(f"INSERT INTO {obj.get_tablename()} ({cols}) VALUES ({placeholders})",
                        list(data.values()), commit=True)
        if obj.id is None:
            obj.id = cur.lastrowid
        return obj

    def update(self, obj: Model, fields: list[str]) -> None:
        sets = ', '.join([f"{k} = ?" for k in fields])
        args = [getattr(obj, k) for k in fields] + [obj.id]
        self._run(f"UPDATE {obj.get_tablename()} SET {sets} WHERE id = ?", args, commit=True)

    def delete(self, cls: Type[Model], id: int) -> int:
        if not in_id_range(id):
            return 0
        cur = self._run(f"DELETE FROM {cls.get_tablename()} WHERE id = ?", [id], commit=True)
        return cur.rowcount

    def by_id(self, cls: Type[T], id: int) -> T | None:
        if not in_id_range(id):
            return None
        row = self._fetchone(f"SELECT * FROM {cls.get_tablename()} WHERE id = ?", [id])
        return cls(row) if row else None

    def all(self, cls: Type[T], order: str = 'id DESC') -> list[T]:
        return self.get_list(cls, f"SELECT * FROM {cls.get_tablename()} ORDER BY {order}")

    def get_list(self, cls: Type[T], sql: str, args: list = None) -> list[T]:
        rows = self._fetchall(sql, args)
        return [cls(row) for row in rows]

    def count(self, cls: Type[Model], where: str = '1=1', args: list = None) -> int:
        row = self._fetchone(f"SELECT COUNT(*) as c FROM {cls.get_tablename()} WHERE {where}", args)
        return row['c']

    def query(self, sql: str, args: list = None) -> list[dict]:
        return self._fetchall(sql, args)
