from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from despacho.core.database import Base

if TYPE_CHECKING:
    from despacho.models.action import Action
    from despacho.models.appointment import Appointment
    from despacho.models.client import Client
    from despacho.models.document import Document


class CaseStatus(enum.IntEnum):
    """
    Ciclo de vida de un expediente.

    El orden numérico es el orden de los informes
    (Abierto, En Trámite, Suspendido, Archivado, Cerrado).
    No se restringen las transiciones.
    """
    OPEN = 1
    IN_PROGRESS = 2
    SUSPENDED = 3
    ARCHIVED = 4
    CLOSED = 5

    @property
    def closes_case(self) -> bool:
        return self in (CaseStatus.ARCHIVED, CaseStatus.CLOSED)


class Case(Base):
    """
    Expediente: asunto legal de un cliente.
    Contenedor de actuaciones, citas y documentos.
    """

    __tablename__ = "cases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    case_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    case_type: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[CaseStatus] = mapped_column(
        Enum(CaseStatus, name="case_status"),
        nullable=False,
        default=CaseStatus.OPEN,
    )

    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    court: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    procedure_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    opened_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    closed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    modified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    client: Mapped["Client"] = relationship("Client", back_populates="cases")

    actions: Mapped[List["Action"]] = relationship(
        "Action",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Action.id",
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        "Appointment",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Appointment.id",
    )

    documents: Mapped[List["Document"]] = relationship(
        "Document",
        back_populates="case",
        passive_deletes=True,
        order_by="Document.id",
    )

    def change_status(self, status: CaseStatus, notes: Optional[str] = None) -> None:
        """Cualquier transición es válida; archivar o cerrar fija la fecha de cierre."""
        now = datetime.now()
        self.status = status
        if status.closes_case:
            self.closed_at = now
        if notes and notes.strip():
            self.notes = notes
        self.modified_at = now

    def __repr__(self) -> str:
        return f"<Case id={self.id} number={self.case_number!r} status={self.status}>"
