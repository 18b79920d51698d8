"""Gestión de despacho de abogados: clientes, expedientes, actuaciones, citas, documentos e informes PDF."""

__version__ = "1.0.0"
