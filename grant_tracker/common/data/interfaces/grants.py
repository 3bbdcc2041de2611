from typing import Sequence, TypedDict

from flask import current_app
from sqlalchemy import delete, literal_column, select

from grant_tracker.common.data.models import Grant
from grant_tracker.extensions import db
from grant_tracker.types import DEFAULT_GRANT_STATUS, DEFAULT_MATCH_PCT


class GrantFields(TypedDict, total=False):
    name: str
    org: str
    cat: str
    amount: str
    cover: str
    deadline: str
    status: str
    match_pct: int
    notes: str


def get_grants_for_client(client_id: str) -> Sequence[Grant]:
    statement = (
        select(Grant)
        .where(Grant.client_id == client_id)
        .order_by(Grant.sort_order, literal_column("grants.rowid"))
    )
    return db.session.scalars(statement).all()


def create_grant(
    client_id: str,
    *,
    name: str = "",
    org: str = "",
    cat: str = "",
    amount: str = "",
    cover: str = "",
    deadline: str = "",
    status: str = DEFAULT_GRANT_STATUS,
    match_pct: int = DEFAULT_MATCH_PCT,
    notes: str = "",
) -> Grant:
    """Append a grant to a client's list.

    New grants all take the default sort_order of 0, so they sit before any grants a bulk replace put at positions
    1 and above, and after existing sort_order 0 grants.

    Raises `sqlalchemy.exc.IntegrityError` if the client doesn't exist.
    """
    grant = Grant(
        client_id=client_id,
        name=name,
        org=org,
        cat=cat,
        amount=amount,
        cover=cover,
        deadline=deadline,
        status=status,
        match_pct=match_pct,
        notes=notes,
    )
    db.session.add(grant)
    db.session.flush()

    current_app.logger.info(
        "Created grant %(grant_id)s for client %(client_id)s", dict(grant_id=grant.id, client_id=client_id)
    )
    return grant


def update_grant(
    grant_id: str,
    *,
    name: str = "",
    org: str = "",
    cat: str = "",
    amount: str = "",
    cover: str = "",
    deadline: str = "",
    status: str = DEFAULT_GRANT_STATUS,
    match_pct: int = DEFAULT_MATCH_PCT,
    notes: str = "",
) -> Grant | None:
    """Overwrite every editable field of a grant, leaving its client and position alone. Updating a grant that
    doesn't exist is a no-op."""
    grant = db.session.get(Grant, grant_id)
    if grant is None:
        current_app.logger.info("Skipped update of unknown grant %(grant_id)s", dict(grant_id=grant_id))
        return None

    grant.name = name
    grant.org = org
    grant.cat = cat
    grant.amount = amount
    grant.cover = cover
    grant.deadline = deadline
    grant.status = status
    grant.match_pct = match_pct
    grant.notes = notes
    db.session.flush()

    current_app.logger.info("Updated grant %(grant_id)s", dict(grant_id=grant_id))
    return grant


def delete_grant(grant_id: str) -> None:
    grant = db.session.get(Grant, grant_id)
    if grant is None:
        return

    db.session.delete(grant)
    db.session.flush()

    current_app.logger.info("Deleted grant %(grant_id)s", dict(grant_id=grant_id))


def replace_grants(client_id: str, grants: Sequence[GrantFields]) -> list[Grant]:
    """Replace a client's whole grant list with `grants`, in the order given.

    Every grant gets a new id and a sort_order matching its position in the list. Nothing here commits: the delete
    and the inserts land in the caller's transaction, so a failure part way through leaves the old list in place.
    """
    db.session.execute(delete(Grant).where(Grant.client_id == client_id))

    new_grants = [Grant(client_id=client_id, sort_order=position, **fields) for position, fields in enumerate(grants)]
    db.session.add_all(new_grants)
    db.session.flush()

    current_app.logger.info(
        "Replaced grants for client %(client_id)s with %(grant_count)s grants",
        dict(client_id=client_id, grant_count=len(new_grants)),
    )
    return new_grants
