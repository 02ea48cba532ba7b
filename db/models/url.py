"""
db/models/url.py

Url model: one registered site, identified by its canonical `scheme://host`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from db.models.url_check import UrlCheck

URL_NAME_MAX_LENGTH = 255
URL_NAME_UNIQUE_CONSTRAINT = "uq_urls_name"


class Url(Base, CreatedAtMixin):
    """
    A registered URL identity.

    Rows are created once and never updated; `name` is the dedupe key.
    """

    __tablename__ = "urls"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(URL_NAME_MAX_LENGTH),
        nullable=False,
        comment="Canonical lowercase scheme://host[:port]",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    checks: Mapped[list["UrlCheck"]] = relationship(
        "UrlCheck",
        back_populates="url",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ── Constraints ────────────────────────────────────────────────────────────

    __table_args__ = (UniqueConstraint("name", name=URL_NAME_UNIQUE_CONSTRAINT),)

    def __repr__(self) -> str:
        return f"<Url id={self.id} name={self.name!r}>"
