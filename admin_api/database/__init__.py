# Admin API database package
from .db import DatabaseConnection

__all__ = ["DatabaseConnection"]
