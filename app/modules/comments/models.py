from dataclasses import asdict, dataclass

from core.storage.schema import Table
from core.storage.statements import ASC, DESC
from core.storage.timeuuid import to_external

# Newest comment first inside each dataset partition
COMMENT_TABLE = Table(
    name="comment_ds",
    columns=(
        ("id_dataset", "text"),
        ("id_comment", "timeuuid"),
        ("user_name", "text"),
        ("comment", "text"),
        ("visible", "boolean"),
    ),
    partition_key=("id_dataset",),
    clustering=(("id_comment", DESC),),
)

# Replies are one level deep and read oldest first
REPLY_TABLE = Table(
    name="comment_reply",
    columns=(
        ("id_comment", "timeuuid"),
        ("reply_id", "timeuuid"),
        ("username", "text"),
        ("reply", "text"),
        ("visible", "boolean"),
    ),
    partition_key=("id_comment",),
    clustering=(("reply_id", ASC),),
)

TABLES = (COMMENT_TABLE, REPLY_TABLE)


@dataclass
class Comment:
    id_dataset: str
    id_comment: str
    comment: str
    user_name: str
    visible: bool

    @classmethod
    def from_row(cls, row):
        return cls(
            id_dataset=row["id_dataset"],
            id_comment=to_external(row["id_comment"]),
            comment=row["comment"],
            user_name=row["user_name"],
            visible=row["visible"],
        )

    def to_dict(self):
        return asdict(self)

    def __repr__(self):
        return f"<Comment {self.id_comment} dataset={self.id_dataset} visible={self.visible}>"


@dataclass
class Reply:
    id_comment: str
    reply_id: str
    reply: str
    username: str
    visible: bool

    @classmethod
    def from_row(cls, row):
        return cls(
            id_comment=to_external(row["id_comment"]),
            reply_id=to_external(row["reply_id"]),
            reply=row["reply"],
            username=row["username"],
            visible=row["visible"],
        )

    def to_dict(self):
        return asdict(self)

    def __repr__(self):
        return f"<Reply {self.reply_id} comment={self.id_comment} visible={self.visible}>"
