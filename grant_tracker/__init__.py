from typing import Literal

from flask import Flask, jsonify, render_template, request
from flask.typing import ResponseReturnValue
from jinja2 import ChoiceLoader, PackageLoader
from pydantic import ValidationError
from sqlalchemy.exc import NoResultFound

from grant_tracker import logging
from grant_tracker.config import INSECURE_DEFAULT_ADMIN_PASSWORD, Environment, get_settings
from grant_tracker.extensions import auto_commit_after_request, db, sqlite_foreign_keys


def _is_api_request() -> bool:
    return request.path.startswith("/api/")


def _not_found() -> ResponseReturnValue:
    if _is_api_request():
        return jsonify(error="Not found"), 404
    return render_template("common/errors/404.html"), 404


def _register_global_error_handlers(app: Flask) -> None:
    @app.errorhandler(401)
    def handle_401(error: Literal[401]) -> ResponseReturnValue:
        return jsonify(error="Unauthorized"), 401

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError) -> ResponseReturnValue:
        app.logger.info(
            "Rejected request body for %(endpoint)s with %(error_count)s validation errors",
            dict(endpoint=request.endpoint, error_count=error.error_count()),
        )
        return jsonify(error="Bad request"), 400

    @app.errorhandler(NoResultFound)
    def handle_sqlalchemy_no_result(error: NoResultFound) -> ResponseReturnValue:
        return _not_found()

    @app.errorhandler(404)
    def handle_404(error: Literal[404]) -> ResponseReturnValue:
        return _not_found()

    @app.errorhandler(500)
    def handle_500(error: Literal[500]) -> ResponseReturnValue:
        # Flask has already logged the original exception; don't leak any of it to the caller.
        if _is_api_request():
            return jsonify(error="Internal server error"), 500
        return render_template("common/errors/500.html"), 500


def _warn_if_default_admin_password(app: Flask) -> None:
    if app.config["FLASK_ENV"] not in {Environment.LOCAL, Environment.UNIT_TEST} and (
        app.config["ADMIN_PASSWORD"] == INSECURE_DEFAULT_ADMIN_PASSWORD
    ):
        app.logger.warning("ADMIN_PASSWORD is not set; the admin API is protected by the publicly known default")


def create_app() -> Flask:
    from grant_tracker.common.data.base import BaseModel
    from grant_tracker.common.data import models  # noqa: F401

    app = Flask(__name__, static_folder=None)
    app.config.from_object(get_settings())
    app.json.ensure_ascii = False  # type: ignore[attr-defined]

    # Initialise extensions
    logging.init_app(app)
    db.init_app(app)
    sqlite_foreign_keys.init_app(app, db)
    auto_commit_after_request.init_app(app)

    # Only creates tables that are missing; an existing database is used as-is.
    with app.app_context():
        BaseModel.metadata.create_all(db.engine)
        db_file = db.engine.url.database

    _warn_if_default_admin_password(app)

    # Configure templates
    app.jinja_loader = ChoiceLoader(
        [
            PackageLoader("grant_tracker.common"),
            PackageLoader("grant_tracker.pages"),
        ]
    )

    # Attach routes
    from grant_tracker.api import api_blueprint
    from grant_tracker.healthcheck import healthcheck_blueprint
    from grant_tracker.pages import pages_blueprint

    app.register_blueprint(healthcheck_blueprint)
    app.register_blueprint(api_blueprint)
    app.register_blueprint(pages_blueprint)

    _register_global_error_handlers(app)

    app.logger.info("Serving database %(db_file)s", dict(db_file=db_file))
    return app
