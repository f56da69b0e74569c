# api/complaints/queries.py
"""
SQLAlchemy query builders for complaints.
"""
from sqlalchemy import select

from db_models.complaint import Complaint


def select_complaint_by_id(complaint_id: str):
    """Select a complaint by its ID."""
    return select(Complaint).where(Complaint.id == complaint_id)


def select_complaint_for_update(complaint_id: str):
    """Select a complaint and lock it for a status transition."""
    return (
        select(Complaint)
        .where(Complaint.id == complaint_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def select_complaints(status: str | None = None):
    """Select complaints, newest first, optionally filtered by status."""
    stmt = select(Complaint)
    if status is not None:
        stmt = stmt.where(Complaint.status == status)
    return stmt.order_by(Complaint.date.desc(), Complaint.created_at.desc(), Complaint.id.desc())
