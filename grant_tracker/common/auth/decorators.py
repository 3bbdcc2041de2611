import functools
from typing import Callable, ParamSpec

from flask import abort, current_app, request
from flask.typing import ResponseReturnValue

from grant_tracker.common.auth.authorisation_helper import AuthorisationHelper

P = ParamSpec("P")


def admin_key_required(
    func: Callable[P, ResponseReturnValue],
) -> Callable[P, ResponseReturnValue]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ResponseReturnValue:
        # Checked before the handler runs, so a rejected request never touches the database.
        if not AuthorisationHelper.is_admin_request():
            current_app.logger.warning(
                "Rejected request without a valid admin key %(method)s %(endpoint)s",
                dict(method=request.method, endpoint=request.endpoint),
            )
            abort(401)

        return func(*args, **kwargs)

    return wrapper
