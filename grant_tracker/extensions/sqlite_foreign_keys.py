import typing as t

import sqlalchemy as sa
import sqlalchemy.event as sa_event
from flask import Flask
from flask_sqlalchemy_lite import SQLAlchemy


class SqliteForeignKeysExtension:
    """
    SQLite ships with foreign key enforcement switched off, and the setting only lasts for a single connection. This
    turns it on for every connection the engines open, so that deleting a client cascades to its grants and a grant
    can't be attached to a client that doesn't exist.
    """

    def __init__(self, app: Flask | None = None, db: SQLAlchemy | None = None) -> None:
        if app and db:
            self.init_app(app, db)

    def init_app(self, app: Flask, db: SQLAlchemy) -> None:
        app.extensions["sqlite_foreign_keys"] = self

        with app.app_context():
            for engine in db.engines.values():
                self._listen(engine)

    def _listen(self, engine: sa.engine.Engine) -> None:
        if engine.dialect.name != "sqlite":
            return

        sa_event.listen(engine, "connect", self._enable_foreign_keys)

    @staticmethod
    def _enable_foreign_keys(dbapi_connection: t.Any, connection_record: t.Any) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()
