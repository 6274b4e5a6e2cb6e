"""
Job model - a posting owned by one company.
"""
from decimal import Decimal
from typing import Optional
from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from jobly.core.database import Base


class Job(Base):
    """
    Job posting entity.

    ``equity`` is an exact NUMERIC fraction between 0 and 1 and is
    exposed as its decimal string form. ``company_handle`` is fixed at
    creation time.
    """

    __tablename__ = "jobs"

    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    salary: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    equity: Mapped[Optional[Decimal]] = mapped_column(
        Numeric,
        nullable=True,
        server_default=text("0"),
    )

    # Foreign Keys
    company_handle: Mapped[str] = mapped_column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Job {self.title} at {self.company_handle}>"
