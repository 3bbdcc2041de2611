from datetime import datetime

from sqlalchemy import ForeignKey, func, literal_column
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grant_tracker.common.data.base import BaseModel
from grant_tracker.types import DEFAULT_GRANT_STATUS, DEFAULT_MATCH_PCT, DEFAULT_PRESENTER


class Client(BaseModel):
    __tablename__ = "clients"

    name: Mapped[str]
    contact: Mapped[str] = mapped_column(default="")
    sector: Mapped[str] = mapped_column(default="")
    email: Mapped[str] = mapped_column(default="")
    phone: Mapped[str] = mapped_column(default="")
    message: Mapped[str] = mapped_column(default="")
    presenter: Mapped[str] = mapped_column(default=DEFAULT_PRESENTER, server_default=DEFAULT_PRESENTER)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # NOTE: grants that share a sort_order keep the order they were inserted in, which SQLite tracks as the rowid.
    #       Don't joinedload this relationship: the rowid ordering refers to the unaliased `grants` table.
    grants: Mapped[list["Grant"]] = relationship(
        "Grant",
        back_populates="client",
        order_by=lambda: [Grant.sort_order, literal_column("grants.rowid")],
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Grant(BaseModel):
    __tablename__ = "grants"

    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="CASCADE"), index=True)
    client: Mapped[Client] = relationship("Client", back_populates="grants")

    name: Mapped[str] = mapped_column(default="")
    org: Mapped[str] = mapped_column(default="")
    cat: Mapped[str] = mapped_column(default="")
    # Free text: amounts are entered as e.g. "₪50,000-100,000", and deadlines as whatever the funder publishes.
    amount: Mapped[str] = mapped_column(default="")
    cover: Mapped[str] = mapped_column(default="")
    deadline: Mapped[str] = mapped_column(default="")
    status: Mapped[str] = mapped_column(default=DEFAULT_GRANT_STATUS, server_default=DEFAULT_GRANT_STATUS)
    match_pct: Mapped[int] = mapped_column(default=DEFAULT_MATCH_PCT, server_default=str(DEFAULT_MATCH_PCT))
    # Internal to the team; never shown on the client-facing view.
    notes: Mapped[str] = mapped_column(default="")
    sort_order: Mapped[int] = mapped_column(default=0, server_default="0")
