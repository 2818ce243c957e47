from app.modules.conversations.models import (
    CONVERSATION_BY_USER_TABLE,
    CONVERSATION_TABLE,
    MESSAGE_TABLE,
    Message,
    UserConversation,
)
from core.repositories.BaseRepository import BaseRepository
from core.repositories.DenormalizedWriter import DenormalizedWriter, Projection
from core.storage import statements
from core.storage.statements import DESC
from core.storage.timeuuid import new_timeuuid


def _canonical(conversation):
    return {
        "id_user_one": conversation["id_user_one"],
        "id_user_two": conversation["id_user_two"],
        "id_conversation": conversation["id_conversation"],
        "user_one_name": conversation["user_one_name"],
        "user_two_name": conversation["user_two_name"],
    }


def _for_user_one(conversation):
    return {
        "id_user": conversation["id_user_one"],
        "id_conversation": conversation["id_conversation"],
        "id_other_user": conversation["id_user_two"],
        "other_user_name": conversation["user_two_name"],
    }


def _for_user_two(conversation):
    return {
        "id_user": conversation["id_user_two"],
        "id_conversation": conversation["id_conversation"],
        "id_other_user": conversation["id_user_one"],
        "other_user_name": conversation["user_one_name"],
    }


CONVERSATION_PROJECTIONS = (
    Projection(CONVERSATION_TABLE, _canonical),
    Projection(CONVERSATION_BY_USER_TABLE, _for_user_one),
    Projection(CONVERSATION_BY_USER_TABLE, _for_user_two),
)


class ConversationRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(CONVERSATION_TABLE, storage)

    def get_by_participants(self, id_user_one, id_user_two):
        """Canonical row for this exact ordering of participants, or None."""
        query = statements.partition_query(
            self.table.name,
            self.table.column_names,
            {"id_user_one": id_user_one, "id_user_two": id_user_two},
            limit=1,
        )
        return self.fetch_one(query)


class ConversationByUserRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(CONVERSATION_BY_USER_TABLE, storage)

    def get_by_user(self, id_user) -> list[UserConversation]:
        return self.get_partition(
            {"id_user": id_user},
            order_by=("id_conversation", DESC),
            row_mapper=UserConversation.from_row,
        )


class MessageRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(MESSAGE_TABLE, storage)

    def create(self, id_conversation, id_user, message) -> Message:
        id_message = new_timeuuid()
        row = {"id_conversation": id_conversation, "id_message": id_message, "id_user": id_user, "message": message}
        self.insert(**row)
        return Message.from_row(row)

    def get_by_conversation(self, id_conversation) -> list[Message]:
        return self.get_partition(
            {"id_conversation": id_conversation},
            order_by=("id_message", DESC),
            row_mapper=Message.from_row,
        )

    def get_latest(self, id_conversation):
        query = statements.partition_query(
            self.table.name,
            self.table.column_names,
            {"id_conversation": id_conversation},
            order_by=("id_message", DESC),
            limit=1,
        )
        return self.fetch_one(query, row_mapper=Message.from_row)


class ConversationWriter(DenormalizedWriter):
    """
    A conversation is stored three times: the canonical pair row and one
    lookup row per participant, all carrying the same id_conversation.
    """

    def __init__(self, storage=None):
        super().__init__(*CONVERSATION_PROJECTIONS, storage=storage)
