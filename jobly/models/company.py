"""
Company model - employers that post jobs.
"""
from typing import Optional
from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobly.core.database import Base


class Company(Base):
    """
    Company entity, keyed by its lowercase handle.

    The handle never changes once the company is created. Deleting a
    company removes its jobs through the ``jobs.company_handle`` foreign key.
    """

    __tablename__ = "companies"

    __table_args__ = (
        CheckConstraint("handle = lower(handle)", name="ck_companies_handle_lower"),
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    num_employees: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Company {self.handle}>"
