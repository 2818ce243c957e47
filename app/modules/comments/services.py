import logging

from app.modules.comments.models import Comment, Reply
from app.modules.comments.repositories import CommentRepository, ReplyRepository
from core.services.BaseService import BaseService
from core.storage.timeuuid import parse_timeuuid

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    def __init__(self, storage=None):
        super().__init__(CommentRepository(storage))
        self.reply_repository = ReplyRepository(storage)

    # ---------- COMMENTS ----------

    def add_comment(self, id_dataset, user_name, comment, visible=True) -> Comment:
        if visible is None:
            visible = True
        created = self.repository.create(id_dataset, user_name, comment, visible)
        logger.info(f"Comment {created.id_comment} added to dataset {id_dataset}")
        return created

    def get_all_comments_by_dataset(self, id_dataset, visible=None) -> list[Comment]:
        """
        Comments of a dataset, newest first. ``visible=None`` returns all of
        them; ``True``/``False`` returns only the visible/hidden ones.
        """
        return self.repository.get_by_dataset(id_dataset, visible=visible)

    def get_all_comments(self) -> list[Comment]:
        return self.get_all()

    def update_comment_visibility(self, id_dataset, id_comment, visible):
        comment_uuid = parse_timeuuid(id_comment, field="id_comment")
        self.repository.set_visibility(id_dataset, comment_uuid, visible)
        return {"id_dataset": id_dataset, "id_comment": str(comment_uuid), "visible": visible, "updated": True}

    # ---------- REPLIES ----------

    def reply_comment(self, id_comment, username, reply, visible=True) -> Reply:
        """Reply to a comment. Replies cannot be replied to."""
        if visible is None:
            visible = True
        comment_uuid = parse_timeuuid(id_comment, field="id_comment")
        created = self.reply_repository.create(comment_uuid, username, reply, visible)
        logger.info(f"Reply {created.reply_id} added to comment {created.id_comment}")
        return created

    def get_comment_replies(self, id_comment, visible=None) -> list[Reply]:
        comment_uuid = parse_timeuuid(id_comment, field="id_comment")
        return self.reply_repository.get_by_comment(comment_uuid, visible=visible)

    def update_reply_visibility(self, id_comment, reply_id, visible):
        comment_uuid = parse_timeuuid(id_comment, field="id_comment")
        reply_uuid = parse_timeuuid(reply_id, field="reply_id")
        self.reply_repository.set_visibility(comment_uuid, reply_uuid, visible)
        return {"id_comment": str(comment_uuid), "reply_id": str(reply_uuid), "visible": visible, "updated": True}
