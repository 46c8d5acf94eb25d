from typing import Optional
from sqlmodel import SQLModel, Field


class Education(SQLModel, table=True):
    """Education record. Dates are free text and not validated."""
    __tablename__ = "education"

    id: Optional[int] = Field(default=None, primary_key=True)

    institution: str
    degree: Optional[str] = Field(default=None)
    field: Optional[str] = Field(default=None)
    start_date: Optional[str] = Field(default=None)
    end_date: Optional[str] = Field(default=None)
