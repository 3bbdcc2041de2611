from typing import Sequence

from flask import current_app
from sqlalchemy import func, literal_column, select
from sqlalchemy.orm import selectinload

from grant_tracker.common.data.models import Client
from grant_tracker.extensions import db
from grant_tracker.types import DEFAULT_PRESENTER


def get_all_clients() -> Sequence[Client]:
    statement = (
        select(Client)
        .options(selectinload(Client.grants))
        # created_at only has second precision; fall back to insertion order so the newest is still first
        .order_by(Client.created_at.desc(), literal_column("clients.rowid").desc())
    )
    return db.session.scalars(statement).all()


def get_client(client_id: str, with_grants: bool = False) -> Client:
    options = []
    if with_grants:
        options.append(selectinload(Client.grants))

    return db.session.get_one(Client, client_id, options=options)


def create_client(
    *,
    name: str,
    contact: str = "",
    sector: str = "",
    email: str = "",
    phone: str = "",
    message: str = "",
    presenter: str = DEFAULT_PRESENTER,
) -> Client:
    client = Client(
        name=name,
        contact=contact,
        sector=sector,
        email=email,
        phone=phone,
        message=message,
        presenter=presenter,
    )
    db.session.add(client)
    db.session.flush()

    current_app.logger.info("Created client %(client_id)s", dict(client_id=client.id))
    return client


def update_client(
    client_id: str,
    *,
    name: str,
    contact: str = "",
    sector: str = "",
    email: str = "",
    phone: str = "",
    message: str = "",
    presenter: str = DEFAULT_PRESENTER,
) -> Client | None:
    """Overwrite every editable field of a client. Updating a client that doesn't exist is a no-op."""
    client = db.session.get(Client, client_id)
    if client is None:
        current_app.logger.info("Skipped update of unknown client %(client_id)s", dict(client_id=client_id))
        return None

    client.name = name
    client.contact = contact
    client.sector = sector
    client.email = email
    client.phone = phone
    client.message = message
    client.presenter = presenter
    # set explicitly: `onupdate` doesn't fire when the submitted values match what's already stored
    client.updated_at = func.now()  # type: ignore[assignment]
    db.session.flush()

    current_app.logger.info("Updated client %(client_id)s", dict(client_id=client_id))
    return client


def delete_client(client_id: str) -> None:
    client = db.session.get(Client, client_id)
    if client is None:
        return

    # grants are removed by the database's ON DELETE CASCADE
    db.session.delete(client)
    db.session.flush()

    current_app.logger.info("Deleted client %(client_id)s", dict(client_id=client_id))
