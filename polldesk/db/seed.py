"""Seed script for local development data."""

from __future__ import annotations

from random import choice, sample

from faker import Faker

from polldesk.core.content import ContentService
from polldesk.db.base import Base, get_engine
from polldesk.db.models import AccountType, District, Poll, PollAccess, Tag, User
from polldesk.db.session import session_scope

fake = Faker()

DISTRICTS = ["North", "South", "East", "West"]
ACCOUNT_TYPES = ["Voter", "Editor", "Administrator"]
TAGS = ["Transport", "Budget", "Parks", "Schools", "Housing"]
ACCESS_LEVELS = ["draft", "public"]
ANSWERS = ["Yes", "No", "Undecided"]


def seed_named(service: ContentService, list_key: str, names: list[str]) -> list:
    return [service.create(list_key, {"name": name}) for name in names]


def seed_access_levels(service: ContentService) -> list[PollAccess]:
    return [service.create("PollAccess", {"level": level}) for level in ACCESS_LEVELS]


def seed_users(
    service: ContentService,
    districts: list[District],
    account_types: list[AccountType],
    count: int = 20,
) -> list[User]:
    users = []
    for _ in range(count):
        user = service.create(
            "User",
            {
                "first_name": fake.first_name(),
                "last_name": fake.last_name(),
                "birth_date": fake.date_time_between(start_date="-80y", end_date="-18y"),
                "email": fake.unique.email(),
                "password": fake.password(length=12),
                "district": choice(districts).id,
                "account_type": choice(account_types).id,
            },
        )
        users.append(user)
    return users


def seed_polls(
    service: ContentService,
    users: list[User],
    access_levels: list[PollAccess],
    tags: list[Tag],
    count: int = 10,
) -> list[Poll]:
    polls = []
    for _ in range(count):
        poll = service.create(
            "Poll",
            {
                "question": fake.sentence(nb_words=8).rstrip(".") + "?",
                "created_by": choice(users).id,
                "access": choice(access_levels).id,
                "tags": [tag.id for tag in sample(tags, k=2)],
            },
        )
        answers = [
            service.create("Answer", {"answer": text, "poll": poll.id})
            for text in ANSWERS
        ]
        for user in sample(users, k=min(5, len(users))):
            service.create("Response", {"answer": choice(answers).id, "user": user.id})
        polls.append(poll)
    return polls


def seed_all(service: ContentService, user_count: int = 20, poll_count: int = 10) -> None:
    districts = seed_named(service, "District", DISTRICTS)
    account_types = seed_named(service, "AccountType", ACCOUNT_TYPES)
    tags = seed_named(service, "Tag", TAGS)
    access_levels = seed_access_levels(service)
    users = seed_users(service, districts, account_types, count=user_count)
    seed_polls(service, users, access_levels, tags, count=poll_count)


def main() -> None:
    engine = get_engine()
    Base.metadata.create_all(engine)

    with session_scope() as session:
        seed_all(ContentService(session))
    print("Seeded database with fake data.")


if __name__ == "__main__":
    main()
