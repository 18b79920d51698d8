"""
Agregadores de datos para los informes PDF.

Cada informe tiene dos pasos:
- build_*: función pura que agrupa, ordena y totaliza entidades ya cargadas
- load_*: consulta la sesión (con eager loading) y delega en build_*

Todas las ordenaciones son estables: a igualdad de clave se conserva el
orden de recuperación (id ascendente).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from despacho.core.exceptions import DataAccessException, wrap_exception
from despacho.core.logger import logger
from despacho.models import Action, Case, CaseStatus, Client
from despacho.reports.formatting import status_label


# =========================================================
# DIRECTORIO DE CLIENTES
# =========================================================

@dataclass
class ClientRow:
    id: int
    full_name: str
    tax_id: str
    phone: Optional[str]
    email: Optional[str]
    city: Optional[str]
    total_cases: int


@dataclass
class ClientDirectoryData:
    rows: List[ClientRow] = field(default_factory=list)
    total_cases: int = 0
    distinct_cities: int = 0

    @property
    def total_clients(self) -> int:
        return len(self.rows)

    @property
    def average_cases_per_client(self) -> float:
        if not self.rows:
            return 0.0
        return self.total_cases / len(self.rows)


def build_client_directory(clients: Iterable[Client]) -> ClientDirectoryData:
    """
    Ordena por (apellidos, nombre) sin distinguir mayúsculas y cuenta
    expedientes y ciudades distintas (no vacías).
    """
    ordered = sorted(
        clients,
        key=lambda c: ((c.last_name or "").casefold(), (c.first_name or "").casefold()),
    )

    rows = [
        ClientRow(
            id=c.id,
            full_name=c.full_name,
            tax_id=c.tax_id,
            phone=c.phone,
            email=c.email,
            city=c.city,
            total_cases=len(c.cases),
        )
        for c in ordered
    ]

    cities = {row.city.strip() for row in rows if row.city and row.city.strip()}

    return ClientDirectoryData(
        rows=rows,
        total_cases=sum(row.total_cases for row in rows),
        distinct_cities=len(cities),
    )


# =========================================================
# EXPEDIENTES POR ESTADO
# =========================================================

@dataclass
class CaseRow:
    id: int
    case_number: str
    subject: str
    client_name: Optional[str]
    opened_at: datetime
    status: CaseStatus
    total_actions: int
    total_appointments: int


@dataclass
class StatusGroup:
    status: CaseStatus
    cases: List[CaseRow] = field(default_factory=list)

    @property
    def label(self) -> str:
        return status_label(self.status)

    @property
    def count(self) -> int:
        return len(self.cases)


def _empty_status_counts() -> Dict[CaseStatus, int]:
    return {status: 0 for status in CaseStatus}


@dataclass
class CasesByStatusData:
    """
    `groups` solo contiene estados con expedientes (una sección de tabla
    por grupo). `status_counts` recorre siempre los cinco estados, para
    las tarjetas del resumen.
    """

    groups: List[StatusGroup] = field(default_factory=list)
    status_counts: Dict[CaseStatus, int] = field(default_factory=_empty_status_counts)

    @property
    def total_cases(self) -> int:
        return sum(group.count for group in self.groups)


def _case_row(case: Case) -> CaseRow:
    return CaseRow(
        id=case.id,
        case_number=case.case_number,
        subject=case.subject,
        client_name=case.client.full_name if case.client is not None else None,
        opened_at=case.opened_at,
        status=case.status,
        total_actions=len(case.actions),
        total_appointments=len(case.appointments),
    )


def build_cases_by_status(cases: Iterable[Case]) -> CasesByStatusData:
    """
    Ordena por estado (Abierto -> Cerrado) y, dentro de cada estado, por
    fecha de apertura descendente. Agrupa respetando ese orden.
    """
    # Dos pasadas estables: primero la clave secundaria
    by_date = sorted(cases, key=lambda c: c.opened_at, reverse=True)
    ordered = sorted(by_date, key=lambda c: int(c.status))

    groups: List[StatusGroup] = []
    for case in ordered:
        if not groups or groups[-1].status != case.status:
            groups.append(StatusGroup(status=case.status))
        groups[-1].cases.append(_case_row(case))

    status_counts = _empty_status_counts()
    for group in groups:
        status_counts[group.status] = status_counts.get(group.status, 0) + group.count

    return CasesByStatusData(groups=groups, status_counts=status_counts)


# =========================================================
# ACTUACIONES POR EXPEDIENTE
# =========================================================

@dataclass
class ActionRow:
    id: int
    action_date: datetime
    action_type: str
    description: str


@dataclass
class CaseActions:
    case_id: int
    case_number: str
    subject: str
    client_name: Optional[str]
    status: CaseStatus
    actions: List[ActionRow] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.actions)


@dataclass
class ActionsByCaseData:
    cases: List[CaseActions] = field(default_factory=list)
    distinct_action_types: int = 0

    @property
    def total_cases(self) -> int:
        return len(self.cases)

    @property
    def total_actions(self) -> int:
        return sum(case.count for case in self.cases)

    @property
    def average_actions_per_case(self) -> float:
        if not self.cases:
            return 0.0
        return self.total_actions / len(self.cases)


def build_actions_by_case(cases: Iterable[Case]) -> ActionsByCaseData:
    """
    Excluye los expedientes sin actuaciones. Expedientes por número
    ascendente; actuaciones por fecha descendente.
    """
    with_actions = [c for c in cases if c.actions]
    ordered = sorted(with_actions, key=lambda c: c.case_number)

    result: List[CaseActions] = []
    action_types = set()

    for case in ordered:
        actions: List[Action] = sorted(case.actions, key=lambda a: a.action_date, reverse=True)
        action_types.update(a.action_type for a in actions)
        result.append(
            CaseActions(
                case_id=case.id,
                case_number=case.case_number,
                subject=case.subject,
                client_name=case.client.full_name if case.client is not None else None,
                status=case.status,
                actions=[
                    ActionRow(
                        id=a.id,
                        action_date=a.action_date,
                        action_type=a.action_type,
                        description=a.description,
                    )
                    for a in actions
                ],
            )
        )

    return ActionsByCaseData(cases=result, distinct_action_types=len(action_types))


# =========================================================
# CARGA DESDE BASE DE DATOS
# =========================================================

def load_client_directory(db: Session) -> ClientDirectoryData:
    try:
        clients = (
            db.query(Client)
            .options(selectinload(Client.cases))
            .order_by(Client.id)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Error cargando clientes", entity="client", action="report_load", error=e)
        raise wrap_exception(e, DataAccessException, operation="load_client_directory", entity="Client")

    return build_client_directory(clients)


def load_cases_by_status(db: Session) -> CasesByStatusData:
    try:
        cases = (
            db.query(Case)
            .options(
                joinedload(Case.client),
                selectinload(Case.actions),
                selectinload(Case.appointments),
            )
            .order_by(Case.id)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Error cargando expedientes", entity="case", action="report_load", error=e)
        raise wrap_exception(e, DataAccessException, operation="load_cases_by_status", entity="Case")

    return build_cases_by_status(cases)


def load_actions_by_case(db: Session) -> ActionsByCaseData:
    try:
        cases = (
            db.query(Case)
            .filter(Case.actions.any())
            .options(joinedload(Case.client), selectinload(Case.actions))
            .order_by(Case.id)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Error cargando actuaciones", entity="action", action="report_load", error=e)
        raise wrap_exception(e, DataAccessException, operation="load_actions_by_case", entity="Action")

    return build_actions_by_case(cases)
