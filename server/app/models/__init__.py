from app.models.client import ClientRecord, ClientStatus

__all__ = [
    "ClientRecord",
    "ClientStatus",
]
