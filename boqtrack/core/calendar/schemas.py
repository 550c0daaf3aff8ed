from datetime import date

from pydantic import BaseModel


class Holiday(BaseModel):
    """A non-working day; recurring holidays repeat on the same month/day every year."""

    date: date
    name: str = ""
    is_recurring: bool = False
