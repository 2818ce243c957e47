from app.modules.comments.models import COMMENT_TABLE, REPLY_TABLE, Comment, Reply
from core.repositories.BaseRepository import BaseRepository
from core.storage.statements import ASC, DESC
from core.storage.timeuuid import new_timeuuid


class CommentRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(COMMENT_TABLE, storage)

    def create(self, id_dataset, user_name, comment, visible=True) -> Comment:
        id_comment = new_timeuuid()
        self.insert(
            id_dataset=id_dataset,
            id_comment=id_comment,
            user_name=user_name,
            comment=comment,
            visible=visible,
        )
        return Comment(
            id_dataset=id_dataset,
            id_comment=str(id_comment),
            comment=comment,
            user_name=user_name,
            visible=visible,
        )

    def get_by_dataset(self, id_dataset, visible=None) -> list[Comment]:
        return self.get_partition(
            {"id_dataset": id_dataset},
            order_by=("id_comment", DESC),
            visible=visible,
            row_mapper=Comment.from_row,
        )

    def get_all(self, row_mapper=Comment.from_row) -> list[Comment]:
        return super().get_all(row_mapper=row_mapper)

    def set_visibility(self, id_dataset, id_comment, visible):
        key = {"id_dataset": id_dataset, "id_comment": id_comment}
        return self.update_columns(key, if_exists=True, visible=visible)


class ReplyRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(REPLY_TABLE, storage)

    def create(self, id_comment, username, reply, visible=True) -> Reply:
        reply_id = new_timeuuid()
        self.insert(
            id_comment=id_comment,
            reply_id=reply_id,
            username=username,
            reply=reply,
            visible=visible,
        )
        return Reply(
            id_comment=str(id_comment),
            reply_id=str(reply_id),
            reply=reply,
            username=username,
            visible=visible,
        )

    def get_by_comment(self, id_comment, visible=None) -> list[Reply]:
        return self.get_partition(
            {"id_comment": id_comment},
            order_by=("reply_id", ASC),
            visible=visible,
            row_mapper=Reply.from_row,
        )

    def set_visibility(self, id_comment, reply_id, visible):
        key = {"id_comment": id_comment, "reply_id": reply_id}
        return self.update_columns(key, if_exists=True, visible=visible)
