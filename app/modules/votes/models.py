from core.storage.schema import Table
from core.storage.statements import ASC

MIN_CALIFICATION = 1
MAX_CALIFICATION = 5

# Votes on a dataset. Every vote gets its own id_vote, so a user who rates
# the same dataset twice ends up with two rows.
DATASET_VOTE_TABLE = Table(
    name="dataset_vote",
    columns=(
        ("dataset_id", "text"),
        ("user_id", "text"),
        ("id_vote", "timeuuid"),
        ("dataset_name", "text"),
        ("dataset_description", "text"),
        ("user_name", "text"),
        ("calification", "int"),
    ),
    partition_key=("dataset_id",),
    clustering=(("user_id", ASC), ("id_vote", ASC)),
)

# Same votes, looked up from the voter's side
VOTE_BY_USER_TABLE = Table(
    name="vote_by_user_ds",
    columns=(
        ("user_id", "text"),
        ("dataset_id", "text"),
        ("id_vote", "timeuuid"),
        ("dataset_name", "text"),
        ("dataset_description", "text"),
        ("calification", "int"),
    ),
    partition_key=("user_id",),
    clustering=(("dataset_id", ASC), ("id_vote", ASC)),
)

TABLES = (DATASET_VOTE_TABLE, VOTE_BY_USER_TABLE)
