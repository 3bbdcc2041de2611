from flask import Blueprint, jsonify, request
from flask.typing import ResponseReturnValue

from grant_tracker.api.models import (
    ClientRequest,
    ClientResponse,
    CreatedClientResponse,
    CreatedGrantResponse,
    GrantRequest,
    OkResponse,
    PublicClientResponse,
    ReplaceGrantsRequest,
)
from grant_tracker.common.auth.decorators import admin_key_required
from grant_tracker.common.data import interfaces
from grant_tracker.extensions import auto_commit_after_request

api_blueprint = Blueprint(name="api", import_name=__name__, url_prefix="/api")


def _json_body() -> object:
    # A missing or unparseable body is passed on as `None`, which the request models reject as a bad request.
    return request.get_json(silent=True)


@api_blueprint.get("/clients")
@admin_key_required
def list_clients() -> ResponseReturnValue:
    clients = interfaces.clients.get_all_clients()
    return jsonify([ClientResponse.model_validate(client).model_dump(mode="json") for client in clients])


@api_blueprint.get("/client/<client_id>")
def get_public_client(client_id: str) -> ResponseReturnValue:
    client = interfaces.clients.get_client(client_id, with_grants=True)
    return jsonify(PublicClientResponse.model_validate(client).model_dump(mode="json"))


@api_blueprint.post("/clients")
@admin_key_required
@auto_commit_after_request
def create_client() -> ResponseReturnValue:
    body = ClientRequest.model_validate(_json_body())
    client = interfaces.clients.create_client(**body.model_dump())
    return jsonify(CreatedClientResponse(id=client.id, name=client.name).model_dump())


@api_blueprint.put("/clients/<client_id>")
@admin_key_required
@auto_commit_after_request
def update_client(client_id: str) -> ResponseReturnValue:
    body = ClientRequest.model_validate(_json_body())
    interfaces.clients.update_client(client_id, **body.model_dump())
    return jsonify(OkResponse().model_dump())


@api_blueprint.delete("/clients/<client_id>")
@admin_key_required
@auto_commit_after_request
def delete_client(client_id: str) -> ResponseReturnValue:
    interfaces.clients.delete_client(client_id)
    return jsonify(OkResponse().model_dump())


@api_blueprint.post("/clients/<client_id>/grants")
@admin_key_required
@auto_commit_after_request
def create_grant(client_id: str) -> ResponseReturnValue:
    body = GrantRequest.model_validate(_json_body())
    grant = interfaces.grants.create_grant(client_id, **body.model_dump())
    return jsonify(CreatedGrantResponse(id=grant.id).model_dump())


@api_blueprint.put("/clients/<client_id>/grants")
@admin_key_required
@auto_commit_after_request
def replace_grants(client_id: str) -> ResponseReturnValue:
    body = ReplaceGrantsRequest.model_validate(_json_body())
    interfaces.grants.replace_grants(client_id, [grant.model_dump() for grant in body.grants])  # type: ignore[misc]
    return jsonify(OkResponse().model_dump())


@api_blueprint.put("/grants/<grant_id>")
@admin_key_required
@auto_commit_after_request
def update_grant(grant_id: str) -> ResponseReturnValue:
    body = GrantRequest.model_validate(_json_body())
    interfaces.grants.update_grant(grant_id, **body.model_dump())
    return jsonify(OkResponse().model_dump())


@api_blueprint.delete("/grants/<grant_id>")
@admin_key_required
@auto_commit_after_request
def delete_grant(grant_id: str) -> ResponseReturnValue:
    interfaces.grants.delete_grant(grant_id)
    return jsonify(OkResponse().model_dump())
