from dataclasses import asdict, dataclass

from core.storage.schema import Table
from core.storage.statements import DESC
from core.storage.timeuuid import timestamp_of, to_external

# Canonical row; (id_user_one, id_user_two) records who started the conversation
CONVERSATION_TABLE = Table(
    name="conversation",
    columns=(
        ("id_user_one", "text"),
        ("id_user_two", "text"),
        ("id_conversation", "timeuuid"),
        ("user_one_name", "text"),
        ("user_two_name", "text"),
    ),
    partition_key=("id_user_one", "id_user_two"),
)

# One row per participant so that each of them can list their conversations
CONVERSATION_BY_USER_TABLE = Table(
    name="conversation_by_user",
    columns=(
        ("id_user", "text"),
        ("id_conversation", "timeuuid"),
        ("id_other_user", "text"),
        ("other_user_name", "text"),
    ),
    partition_key=("id_user",),
    clustering=(("id_conversation", DESC),),
)

MESSAGE_TABLE = Table(
    name="message_by_conversation",
    columns=(
        ("id_conversation", "timeuuid"),
        ("id_message", "timeuuid"),
        ("id_user", "text"),
        ("message", "text"),
    ),
    partition_key=("id_conversation",),
    clustering=(("id_message", DESC),),
)

TABLES = (CONVERSATION_TABLE, CONVERSATION_BY_USER_TABLE, MESSAGE_TABLE)


@dataclass
class UserConversation:
    id_conversation: str
    id_user: str
    id_other_user: str
    other_user_name: str
    created_at: str

    @classmethod
    def from_row(cls, row):
        return cls(
            id_conversation=to_external(row["id_conversation"]),
            id_user=row["id_user"],
            id_other_user=row["id_other_user"],
            other_user_name=row["other_user_name"],
            # creation time is the one embedded in the conversation id
            created_at=timestamp_of(row["id_conversation"]).isoformat(),
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class Message:
    id_conversation: str
    id_message: str
    id_user: str
    message: str
    timestamp: str

    @classmethod
    def from_row(cls, row):
        return cls(
            id_conversation=to_external(row["id_conversation"]),
            id_message=to_external(row["id_message"]),
            id_user=row["id_user"],
            message=row["message"],
            timestamp=timestamp_of(row["id_message"]).isoformat(),
        )

    def to_dict(self):
        return asdict(self)

    def __repr__(self):
        return f"<Message {self.id_message} conversation={self.id_conversation} user={self.id_user}>"
