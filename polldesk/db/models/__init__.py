"""ORM model exports."""

from polldesk.db.models.account_types import AccountType
from polldesk.db.models.answers import Answer
from polldesk.db.models.districts import District
from polldesk.db.models.poll_access import PollAccess, PollAccessLevel
from polldesk.db.models.polls import Poll, poll_tags
from polldesk.db.models.responses import Response
from polldesk.db.models.tags import Tag
from polldesk.db.models.users import User

# ORM class for each declared list key
MODELS = {
    "User": User,
    "District": District,
    "AccountType": AccountType,
    "Poll": Poll,
    "PollAccess": PollAccess,
    "Answer": Answer,
    "Response": Response,
    "Tag": Tag,
}

__all__ = [
    "AccountType",
    "Answer",
    "District",
    "MODELS",
    "Poll",
    "PollAccess",
    "PollAccessLevel",
    "Response",
    "Tag",
    "User",
    "poll_tags",
]
