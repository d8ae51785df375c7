"""Tests for lookup indices and search."""

from sqlalchemy.orm import Session

from slotshare.services.availability import AvailabilityService
from slotshare.services.lookup import LookupIndex
from slotshare.services.search import SearchService


def test_search_by_email(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test an email resolves to all of its owner's availabilities."""
    first = service.create(db_session, "ada", make_request(owner_email="ada@example.com"))
    second = service.create(db_session, "ada", make_request(title="Evenings"))

    results = search_service.by_email(db_session, "ada@example.com")
    assert [a.id for a in results] == [first.id, second.id]


def test_search_by_username(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test a username resolves to its owner's availabilities."""
    created = service.create(db_session, "ada", make_request(owner_name="ada_l"))
    assert [a.id for a in search_service.by_username(db_session, "ada_l")] == [created.id]


def test_search_no_match(db_session: Session, search_service: SearchService):
    """Test unknown keys return an empty list."""
    assert search_service.by_email(db_session, "nobody@example.com") == []
    assert search_service.by_username(db_session, "nobody") == []
    assert search_service.by_owner(db_session, "nobody") == []


def test_search_by_owner(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test owner search is the owner's listing."""
    created = service.create(db_session, "ada", make_request())
    assert [a.id for a in search_service.by_owner(db_session, "ada")] == [created.id]


def test_batch_search_by_emails_keeps_positions(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test one result list per input email, in order, misses included."""
    ada = service.create(db_session, "ada", make_request(owner_email="a@x.com"))
    bob = service.create(db_session, "bob", make_request(owner_email="b@x.com"))

    results = search_service.by_emails(
        db_session, ["b@x.com", "nomatch@x.com", "a@x.com", "b@x.com"]
    )

    assert len(results) == 4
    assert [a.id for a in results[0]] == [bob.id]
    assert results[1] == []
    assert [a.id for a in results[2]] == [ada.id]
    assert [a.id for a in results[3]] == [bob.id]


def test_batch_search_by_usernames(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test batch username search preserves length and order."""
    ada = service.create(db_session, "ada", make_request(owner_name="ada"))

    results = search_service.by_usernames(db_session, ["nobody", "ada"])
    assert results[0] == []
    assert [a.id for a in results[1]] == [ada.id]


def test_batch_search_empty_input(db_session: Session, search_service: SearchService):
    """Test an empty batch returns an empty list."""
    assert search_service.by_emails(db_session, []) == []


def test_email_last_write_wins(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test a later create with the same email repoints the index."""
    service.create(db_session, "ada", make_request(owner_email="shared@x.com"))
    bob = service.create(db_session, "bob", make_request(owner_email="shared@x.com"))

    assert [a.id for a in search_service.by_email(db_session, "shared@x.com")] == [bob.id]


def test_delete_does_not_prune_lookup(
    db_session: Session, service: AvailabilityService, search_service: SearchService, make_request
):
    """Test the email still resolves to the owner after their availability is deleted."""
    first = service.create(db_session, "ada", make_request(owner_email="a@x.com"))
    second = service.create(db_session, "ada", make_request(title="Other"))
    service.delete(db_session, "ada", first.id)

    assert service.lookup.owner_for_email("a@x.com") == "ada"
    assert [a.id for a in search_service.by_email(db_session, "a@x.com")] == [second.id]


def test_rebuild_from_store(db_session: Session, service: AvailabilityService, make_request):
    """Test a fresh index re-derives entries from the store, latest creation winning."""
    service.create(db_session, "ada", make_request(owner_email="shared@x.com", owner_name="ada"))
    service.create(db_session, "bob", make_request(owner_email="shared@x.com", owner_name="bob"))

    rebuilt = LookupIndex()
    rebuilt.rebuild(db_session)

    assert rebuilt.owner_for_email("shared@x.com") == "bob"
    assert rebuilt.owner_for_username("ada") == "ada"
    assert rebuilt.owner_for_username("bob") == "bob"
    assert rebuilt.owner_for_email("missing@x.com") is None
