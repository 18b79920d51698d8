from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from despacho.core.database import Base

if TYPE_CHECKING:
    from despacho.models.case import Case


class Client(Base):
    """
    Cliente del despacho (persona física o jurídica).
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(150), nullable=False)

    # DNI para personas físicas, CIF para jurídicas
    tax_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True, index=True)

    phone: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(250), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )
    modified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Borrado restringido: un cliente con expedientes no se elimina
    cases: Mapped[List["Case"]] = relationship(
        "Case",
        back_populates="client",
        passive_deletes="all",
        order_by="Case.id",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Client id={self.id} tax_id={self.tax_id!r}>"
