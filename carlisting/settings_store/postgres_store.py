import psycopg
from psycopg import sql

from carlisting.database.connection import (
    PoolNotInitializedError,
    close_pool,
    get_connection,
)
from carlisting.settings_store.base import SETTERS, BaseSettingsStore
from carlisting.settings_store.exceptions import SettingsStoreError


class PostgresSettingsStore(BaseSettingsStore):
    """Calls the settings functions directly in PostgreSQL.

    Each call borrows its own pooled connection, so concurrent calls from
    several threads are safe.
    """

    def call(self, function: str, value: str | None = None) -> str | None:
        self._check_function(function, value)
        if function in SETTERS:
            query = sql.SQL("SELECT {}(p_value => %s)").format(sql.Identifier(function))
            params: tuple[str | None, ...] = (value,)
        else:
            query = sql.SQL("SELECT {}()").format(sql.Identifier(function))
            params = ()

        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    row = cur.fetchone()
                if function in SETTERS:
                    conn.commit()
        except (psycopg.Error, PoolNotInitializedError) as exc:
            raise SettingsStoreError(f"Settings call {function} failed: {exc}") from exc

        if function in SETTERS or row is None or row[0] is None:
            return None
        return str(row[0])

    def close(self) -> None:
        close_pool()
