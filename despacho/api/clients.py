"""
ENDPOINTS DE CLIENTES.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from despacho.api.errors import commit_or_raise, not_found, to_http_exception
from despacho.core.database import get_db
from despacho.core.exceptions import DuplicateEntityException, EntityInUseException
from despacho.core.logger import logger
from despacho.models import Case, Client
from despacho.models.client_summary import ClientSummary, CreateClientRequest, UpdateClientRequest


router = APIRouter(
    prefix="/clientes",
    tags=["clientes"],
)


def _build_client_summary(client: Client) -> ClientSummary:
    return ClientSummary(
        id=client.id,
        first_name=client.first_name,
        last_name=client.last_name,
        tax_id=client.tax_id,
        phone=client.phone,
        email=client.email,
        address=client.address,
        city=client.city,
        postal_code=client.postal_code,
        notes=client.notes,
        created_at=client.created_at,
        modified_at=client.modified_at,
        total_cases=len(client.cases),
    )


def _clients_query(db: Session):
    return (
        db.query(Client)
        .options(selectinload(Client.cases))
        .order_by(Client.last_name, Client.first_name, Client.id)
    )


def _get_client_or_404(client_id: int, db: Session) -> Client:
    client = db.query(Client).options(selectinload(Client.cases)).filter(Client.id == client_id).first()
    if client is None:
        raise not_found("Cliente", client_id)
    return client


def _ensure_unique_tax_id(tax_id: str, db: Session, exclude_id: Optional[int] = None) -> None:
    query = db.query(Client).filter(Client.tax_id == tax_id)
    if exclude_id is not None:
        query = query.filter(Client.id != exclude_id)
    if query.first() is not None:
        raise to_http_exception(DuplicateEntityException("cliente", "DNI/CIF", tax_id))


@router.get("", response_model=List[ClientSummary], summary="Listar clientes")
def list_clients(db: Session = Depends(get_db)) -> List[ClientSummary]:
    return [_build_client_summary(c) for c in _clients_query(db).all()]


@router.get("/buscar", response_model=List[ClientSummary], summary="Buscar clientes")
def search_clients(
    termino: str = Query(..., min_length=1, description="Texto a buscar"),
    db: Session = Depends(get_db),
) -> List[ClientSummary]:
    """Busca en nombre, apellidos, DNI/CIF, email y ciudad (sin distinguir mayúsculas)."""
    pattern = f"%{termino.lower()}%"
    clients = (
        _clients_query(db)
        .filter(
            or_(
                func.lower(Client.first_name).like(pattern),
                func.lower(Client.last_name).like(pattern),
                func.lower(Client.tax_id).like(pattern),
                func.lower(Client.email).like(pattern),
                func.lower(Client.city).like(pattern),
            )
        )
        .all()
    )
    return [_build_client_summary(c) for c in clients]


@router.get("/{client_id}", response_model=ClientSummary)
def get_client(client_id: int, db: Session = Depends(get_db)) -> ClientSummary:
    return _build_client_summary(_get_client_or_404(client_id, db))


@router.post("", response_model=ClientSummary, status_code=status.HTTP_201_CREATED)
def create_client(payload: CreateClientRequest, db: Session = Depends(get_db)) -> ClientSummary:
    _ensure_unique_tax_id(payload.tax_id, db)

    client = Client(**payload.model_dump(), created_at=datetime.now())
    db.add(client)
    commit_or_raise(db, "create_client", "Client")

    logger.info("Client created", entity="client", entity_id=client.id, action="client_created")
    return _build_client_summary(_get_client_or_404(client.id, db))


@router.put("/{client_id}", response_model=ClientSummary)
def update_client(
    client_id: int,
    payload: UpdateClientRequest,
    db: Session = Depends(get_db),
) -> ClientSummary:
    client = _get_client_or_404(client_id, db)
    _ensure_unique_tax_id(payload.tax_id, db, exclude_id=client_id)

    for field, value in payload.model_dump().items():
        setattr(client, field, value)
    client.modified_at = datetime.now()
    commit_or_raise(db, "update_client", "Client")

    logger.info("Client updated", entity="client", entity_id=client_id, action="client_updated")
    return _build_client_summary(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: int, db: Session = Depends(get_db)) -> None:
    """Un cliente con expedientes no se puede eliminar (409)."""
    client = _get_client_or_404(client_id, db)

    case_count = db.query(Case).filter(Case.client_id == client_id).count()
    if case_count:
        raise to_http_exception(
            EntityInUseException("cliente", client_id, f"tiene {case_count} expedientes asociados")
        )

    db.delete(client)
    commit_or_raise(db, "delete_client", "Client")
    logger.info("Client deleted", entity="client", entity_id=client_id, action="client_deleted")
