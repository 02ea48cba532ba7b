"""
db/models/url_check.py

UrlCheck model: one executed check against a registered URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from db.models.url import Url


class UrlCheck(Base, CreatedAtMixin):
    """
    Stored only when the target answered with an HTTP response.
    """

    __tablename__ = "url_checks"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    url_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("urls.id", ondelete="CASCADE"),
        nullable=False,
    )

    status_code: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    h1: Mapped[str | None] = mapped_column(Text, nullable=True)

    title: Mapped[str | None] = mapped_column(Text, nullable=True)

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="content of <meta name=description>",
    )

    url: Mapped["Url"] = relationship("Url", back_populates="checks")

    __table_args__ = (
        Index("ix_url_checks_url_id_created_at", "url_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<UrlCheck id={self.id} url_id={self.url_id} "
            f"status_code={self.status_code}>"
        )
