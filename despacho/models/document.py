from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from despacho.core.database import Base

if TYPE_CHECKING:
    from despacho.models.case import Case


@dataclass(frozen=True)
class CaseId:
    """Referencia a un expediente existente."""

    value: int


# None = documento sin expediente (p. ej. un informe generado por el sistema)
CaseRef = Union[None, CaseId]


class Document(Base):
    """
    Registro documental. Puede pertenecer a un expediente o ser un
    artefacto generado por el sistema (case_id NULL).
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    case_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("cases.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    filename: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    document_type: Mapped[str] = mapped_column(String(100), nullable=False)

    storage_path: Mapped[str] = mapped_column(String(500), nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    extension: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    uploaded_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    modified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    case: Mapped[Optional["Case"]] = relationship("Case", back_populates="documents")

    @property
    def case_ref(self) -> CaseRef:
        if self.case_id is None:
            return None
        return CaseId(self.case_id)

    def __repr__(self) -> str:
        return f"<Document id={self.id} filename={self.filename!r}>"
