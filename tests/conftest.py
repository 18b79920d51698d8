"""Fixtures pytest: base de datos en memoria, cliente HTTP y datos de ejemplo."""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from despacho.core.database import Base, enable_sqlite_foreign_keys, get_db
from despacho.models import Action, Appointment, Case, CaseStatus, Client


@pytest.fixture(scope="function")
def db_session():
    """Sesión DB en memoria para tests (una conexión compartida entre hilos)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def reports_dir(tmp_path):
    return tmp_path / "reportes"


@pytest.fixture
def api_client(db_session, reports_dir):
    """TestClient con get_db y el servicio de informes apuntando a la sesión de test."""
    from despacho.api.reports import get_report_service
    from despacho.main import app
    from despacho.reports.service import ReportService

    def override_get_db():
        yield db_session

    def override_report_service():
        return ReportService(db_session, reports_dir=reports_dir)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_report_service] = override_report_service

    yield TestClient(app)

    app.dependency_overrides.clear()


# =========================================================
# FACTORÍAS
# =========================================================

@pytest.fixture
def make_client(db_session):
    counter = {"n": 0}

    def _make(first_name="Ana", last_name="García", city="Madrid", **kwargs):
        counter["n"] += 1
        client = Client(
            first_name=first_name,
            last_name=last_name,
            tax_id=kwargs.pop("tax_id", f"{counter['n']:08d}X"),
            city=city,
            **kwargs,
        )
        db_session.add(client)
        db_session.commit()
        return client

    return _make


@pytest.fixture
def make_case(db_session):
    counter = {"n": 0}

    def _make(client, status=CaseStatus.OPEN, opened_at=None, **kwargs):
        counter["n"] += 1
        case = Case(
            case_number=kwargs.pop("case_number", f"EXP-2024-{counter['n']:03d}"),
            subject=kwargs.pop("subject", f"Asunto {counter['n']}"),
            case_type=kwargs.pop("case_type", "Civil"),
            status=status,
            client=client,
            opened_at=opened_at or datetime(2024, 1, counter["n"] % 28 + 1),
            **kwargs,
        )
        db_session.add(case)
        db_session.commit()
        return case

    return _make


@pytest.fixture
def make_action(db_session):
    def _make(case, action_date, action_type="Escrito", description="Presentación de escrito"):
        action = Action(
            case=case,
            action_date=action_date,
            action_type=action_type,
            description=description,
        )
        db_session.add(action)
        db_session.commit()
        return action

    return _make


@pytest.fixture
def make_appointment(db_session):
    def _make(case, starts_at, completed=False, title="Reunión con cliente"):
        appointment = Appointment(
            case=case,
            title=title,
            starts_at=starts_at,
            ends_at=starts_at.replace(hour=min(starts_at.hour + 1, 23)),
            appointment_type="Reunión",
            completed=completed,
        )
        db_session.add(appointment)
        db_session.commit()
        return appointment

    return _make
