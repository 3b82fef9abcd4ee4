"""
The PollDesk schema declaration.

Each entry is one list (a.k.a. list key): its fields, its relationships
and how the admin UI presents it. Relationships name their inverse with
``ref`` so both sides of every pair can be checked at load time.
"""

from polldesk.core.schema_registry.fields import (
    ListSchema,
    ListUI,
    OnDelete,
    PasswordField,
    RelationshipField,
    RelationshipUI,
    SelectField,
    SelectOption,
    TextField,
    TimestampField,
)

# Relationship cards showing a user's name, used by District and AccountType
_USER_CARDS = RelationshipUI(
    display_mode="cards",
    card_fields=("first_name", "last_name"),
    link_to_item=True,
)


# -----------------------------
# People
# -----------------------------

USER = ListSchema(
    key="User",
    description="A person who can author polls and respond to them",
    fields={
        "first_name": TextField(is_required=True),
        "last_name": TextField(is_required=True),
        "birth_date": TimestampField(),
        "email": TextField(
            is_required=True,
            is_unique=True,
            is_indexed=True,
            is_filterable=True,
        ),
        "password": PasswordField(is_required=True),
        "district": RelationshipField(ref="District.users"),
        "account_type": RelationshipField(ref="AccountType.users"),
        "polls": RelationshipField(ref="Poll.created_by", many=True),
        "responses": RelationshipField(
            ref="Response.user", many=True, on_delete=OnDelete.CASCADE
        ),
    },
    ui=ListUI(
        label_field="first_name",
        initial_columns=("first_name", "last_name", "district"),
    ),
)

DISTRICT = ListSchema(
    key="District",
    description="Geographic district a user belongs to",
    fields={
        "name": TextField(is_required=True),
        "users": RelationshipField(ref="User.district", many=True, ui=_USER_CARDS),
    },
    ui=ListUI(label_field="name", initial_columns=("name",)),
)

ACCOUNT_TYPE = ListSchema(
    key="AccountType",
    description="Kind of account a user holds",
    fields={
        "name": TextField(is_required=True),
        "users": RelationshipField(
            ref="User.account_type", many=True, ui=_USER_CARDS
        ),
    },
    ui=ListUI(label_field="name"),
)


# -----------------------------
# Polls
# -----------------------------

POLL = ListSchema(
    key="Poll",
    description="A question put to users",
    fields={
        "question": TextField(is_required=True),
        "created_at": TimestampField(default_now=True, is_immutable=True),
        "created_by": RelationshipField(ref="User.polls"),
        "access": RelationshipField(ref="PollAccess.polls"),
        "answers": RelationshipField(
            ref="Answer.poll", many=True, on_delete=OnDelete.CASCADE
        ),
        "tags": RelationshipField(ref="Tag.polls", many=True),
    },
    ui=ListUI(label_field="question", initial_columns=("question", "created_by")),
)

POLL_ACCESS = ListSchema(
    key="PollAccess",
    description="Visibility level shared by polls",
    fields={
        # New polls start off as drafts
        "level": SelectField(
            options=(
                SelectOption(label="Draft", value="draft"),
                SelectOption(label="Public", value="public"),
            ),
            default="draft",
            display_mode="segmented-control",
        ),
        "polls": RelationshipField(ref="Poll.access", many=True),
    },
    ui=ListUI(label_field="level"),
)

ANSWER = ListSchema(
    key="Answer",
    description="A possible answer to a poll",
    fields={
        "answer": TextField(is_required=True),
        "poll": RelationshipField(ref="Poll.answers"),
        "responses": RelationshipField(
            ref="Response.answer", many=True, on_delete=OnDelete.CASCADE
        ),
    },
    ui=ListUI(label_field="answer", is_hidden=True),
)

RESPONSE = ListSchema(
    key="Response",
    description="One user's choice of one answer",
    fields={
        "answer": RelationshipField(ref="Answer.responses", is_required=True),
        "user": RelationshipField(ref="User.responses", is_required=True),
    },
    ui=ListUI(label_field="answer", is_hidden=True),
)

TAG = ListSchema(
    key="Tag",
    description="Label used to group polls",
    fields={
        "name": TextField(is_required=True),
        "polls": RelationshipField(ref="Poll.tags", many=True),
    },
)


LISTS: dict[str, ListSchema] = {
    schema.key: schema
    for schema in (
        USER,
        DISTRICT,
        ACCOUNT_TYPE,
        POLL,
        POLL_ACCESS,
        ANSWER,
        RESPONSE,
        TAG,
    )
}
