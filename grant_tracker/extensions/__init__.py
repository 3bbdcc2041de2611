from flask_sqlalchemy_lite import SQLAlchemy

from grant_tracker.extensions.auto_commit_after_request import AutoCommitAfterRequestExtension
from grant_tracker.extensions.sqlite_foreign_keys import SqliteForeignKeysExtension

db = SQLAlchemy()
auto_commit_after_request = AutoCommitAfterRequestExtension(db=db)
sqlite_foreign_keys = SqliteForeignKeysExtension()


__all__ = [
    "db",
    "auto_commit_after_request",
    "sqlite_foreign_keys",
]
