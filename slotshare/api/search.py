"""Availability search endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slotshare.database import get_db
from slotshare.models.availability import Availability as AvailabilityModel
from slotshare.schemas.availability import Availability
from slotshare.schemas.search import EmailBatch, UsernameBatch
from slotshare.services.search import SearchService, get_search_service

router = APIRouter(prefix="/api/v1/search", tags=["search"])


@router.get("/email", response_model=list[Availability])
def search_by_email(
    email: str = Query(..., description="Owner email to look up"),
    db: Session = Depends(get_db),
    search: SearchService = Depends(get_search_service),
) -> list[AvailabilityModel]:
    """List the availabilities of the owner registered under an email."""
    return search.by_email(db, email)


@router.get("/username", response_model=list[Availability])
def search_by_username(
    username: str = Query(..., description="Owner username to look up"),
    db: Session = Depends(get_db),
    search: SearchService = Depends(get_search_service),
) -> list[AvailabilityModel]:
    """List the availabilities of the owner registered under a username."""
    return search.by_username(db, username)


@router.get("/owner/{owner}", response_model=list[Availability])
def search_by_owner(
    owner: str,
    db: Session = Depends(get_db),
    search: SearchService = Depends(get_search_service),
) -> list[AvailabilityModel]:
    """List an owner's availabilities by account identifier."""
    return search.by_owner(db, owner)


@router.post("/emails", response_model=list[list[Availability]])
def search_by_emails(
    batch: EmailBatch,
    db: Session = Depends(get_db),
    search: SearchService = Depends(get_search_service),
) -> list[list[AvailabilityModel]]:
    """Batch lookup: one result list per email, in request order."""
    return search.by_emails(db, batch.emails)


@router.post("/usernames", response_model=list[list[Availability]])
def search_by_usernames(
    batch: UsernameBatch,
    db: Session = Depends(get_db),
    search: SearchService = Depends(get_search_service),
) -> list[list[AvailabilityModel]]:
    """Batch lookup: one result list per username, in request order."""
    return search.by_usernames(db, batch.usernames)
