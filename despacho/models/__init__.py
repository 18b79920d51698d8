from despacho.models.client import Client
from despacho.models.case import Case, CaseStatus
from despacho.models.action import Action
from despacho.models.appointment import Appointment
from despacho.models.document import CaseId, CaseRef, Document

__all__ = [
    "Action",
    "Appointment",
    "Case",
    "CaseId",
    "CaseRef",
    "CaseStatus",
    "Client",
    "Document",
]
