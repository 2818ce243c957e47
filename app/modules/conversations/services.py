import logging

from app.modules.conversations.repositories import (
    ConversationByUserRepository,
    ConversationRepository,
    ConversationWriter,
    MessageRepository,
)
from core.services.BaseService import BaseService
from core.storage.timeuuid import new_timeuuid, parse_timeuuid, to_external

logger = logging.getLogger(__name__)


class ConversationService(BaseService):
    def __init__(self, storage=None):
        super().__init__(ConversationRepository(storage))
        self.by_user_repository = ConversationByUserRepository(storage)
        self.message_repository = MessageRepository(storage)
        self.writer = ConversationWriter(storage)

    # ---------- CONVERSATIONS ----------

    def conversation_exists(self, id_user_one, id_user_two):
        """
        Look for a conversation between the two users in either direction.
        This read is not linked to :meth:`start_conversation`; two concurrent
        callers can both see "missing" and both create one.
        """
        for first, second in ((id_user_one, id_user_two), (id_user_two, id_user_one)):
            row = self.repository.get_by_participants(first, second)
            if row is not None:
                return {"exists": True, "id_conversation": to_external(row["id_conversation"])}
        return {"exists": False, "id_conversation": None}

    def start_conversation(self, id_user_one, id_user_two, user_one_name, user_two_name):
        id_conversation = new_timeuuid()
        self.writer.write(
            {
                "id_conversation": id_conversation,
                "id_user_one": id_user_one,
                "id_user_two": id_user_two,
                "user_one_name": user_one_name,
                "user_two_name": user_two_name,
            }
        )
        logger.info(f"Conversation {id_conversation} started between {id_user_one} and {id_user_two}")

        return {
            "id_conversation": str(id_conversation),
            "id_user_one": id_user_one,
            "id_user_two": id_user_two,
            "user_one_name": user_one_name,
            "user_two_name": user_two_name,
            "created_at": id_conversation.datetime.isoformat(),
        }

    def get_user_conversations(self, id_user):
        return self.by_user_repository.get_by_user(id_user)

    # ---------- MESSAGES ----------

    def send_message(self, id_conversation, id_user, message):
        conversation_uuid = parse_timeuuid(id_conversation, field="id_conversation")
        return self.message_repository.create(conversation_uuid, id_user, message)

    def get_conversation_messages(self, id_conversation):
        """Messages of a conversation, newest first."""
        conversation_uuid = parse_timeuuid(id_conversation, field="id_conversation")
        return self.message_repository.get_by_conversation(conversation_uuid)

    def get_latest_message(self, id_conversation):
        """The most recent message, or None when nothing has been sent yet."""
        conversation_uuid = parse_timeuuid(id_conversation, field="id_conversation")
        return self.message_repository.get_latest(conversation_uuid)
