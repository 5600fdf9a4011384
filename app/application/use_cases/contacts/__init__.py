"""Contact and card use cases."""

from app.application.use_cases.contacts.card_operations import CardService
from app.application.use_cases.contacts.contact_operations import ContactService

__all__ = [
    "CardService",
    "ContactService",
]
