"""Tests for the development seed data."""

from polldesk.core.content import ContentService
from polldesk.db.seed import ACCOUNT_TYPES, ANSWERS, DISTRICTS, TAGS, seed_all


def test_seed_all(service: ContentService) -> None:
    """Seeding should go through the content service without rejections."""
    seed_all(service, user_count=6, poll_count=2)

    assert len(service.list_items("District")) == len(DISTRICTS)
    assert len(service.list_items("AccountType")) == len(ACCOUNT_TYPES)
    assert len(service.list_items("Tag")) == len(TAGS)
    assert len(service.list_items("User")) == 6

    polls = service.list_items("Poll")
    assert len(polls) == 2
    for poll in polls:
        assert len(poll.answers) == len(ANSWERS)
        assert len(poll.tags) == 2
        assert poll.created_by is not None

    assert len(service.list_items("Response")) == 2 * 5
