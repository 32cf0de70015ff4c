# CRUD operations package

from app.crud.base import CRUDBase
from app.crud.user import CRUDUser

__all__ = [
    "CRUDBase",
    "CRUDUser",
]
