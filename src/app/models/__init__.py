"""Database models."""
from app.models.customer import Customer
from app.models.transaction import Transaction
from app.models.user import Role, User

__all__ = ["Customer", "Transaction", "Role", "User"]
