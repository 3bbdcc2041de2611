from flask import Blueprint, render_template
from flask.typing import ResponseReturnValue

from grant_tracker.api.models import PublicClientResponse
from grant_tracker.common.data import interfaces

pages_blueprint = Blueprint(name="pages", import_name=__name__)


@pages_blueprint.get("/client/<client_id>")
def client_view(client_id: str) -> ResponseReturnValue:
    client = interfaces.clients.get_client(client_id, with_grants=True)
    # Rendered from the public model, so internal notes can't reach the template.
    return render_template("pages/client.html", client=PublicClientResponse.model_validate(client))


@pages_blueprint.get("/", defaults={"path": ""})
@pages_blueprint.get("/<path:path>")
def index(path: str) -> ResponseReturnValue:
    return render_template("pages/index.html")
