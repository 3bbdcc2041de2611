from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from flask import Response, g
from flask.sansio.app import App
from flask_sqlalchemy_lite import SQLAlchemy
from sqlalchemy.exc import PendingRollbackError

P = ParamSpec("P")
T = TypeVar("T")


class AutoCommitAfterRequestExtension:
    """
    Provides a callable method to call `commit` on the Flask SQLAlchemy session
    at the end of a request lifecyle.

    Use an instance of this as a decorator on Flask HTTP handlers that write to the database. Everything the handler
    does is committed as one transaction if the response is successful, and rolled back otherwise.

    ```
    auto_commit_after_request = AutoCommitAfterRequestExtension(db=db)

    @app.put("/api/clients/<client_id>/grants")
    @auto_commit_after_request
    def handler(client_id):
        pass
    ```
    """

    def __init__(self, db: SQLAlchemy):
        self._db = db

    def init_app(self, app: App) -> None:
        app.extensions["gt_auto_commit_after_request"] = self
        app.after_request(self._commit_session)

    # see https://mypy.readthedocs.io/en/stable/generics.html#declaring-decorators
    def __call__(self, func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            g._gt_should_auto_commit = True
            return func(*args, **kwargs)

        return wrapper

    def _commit_session(self, response: Response) -> Response:
        # error handlers build a new response, which still passes through "after_request"; only commit if the
        # handler's response was successful
        if g.get("_gt_should_auto_commit", False):
            success_response = 200 <= response.status_code < 400
            if success_response:
                try:
                    self._db.session.commit()
                except PendingRollbackError:
                    # an integrity error or similar has already been caught by the session (through a `flush`) and
                    # handled by the http handler; clean up the session but carry on
                    self._db.session.rollback()
            else:
                self._db.session.rollback()

        return response
