from app.modules.votes.models import DATASET_VOTE_TABLE, VOTE_BY_USER_TABLE
from core.repositories.BaseRepository import BaseRepository
from core.repositories.DenormalizedWriter import DenormalizedWriter, Projection


def _by_dataset(vote):
    return {
        "dataset_id": vote["dataset_id"],
        "user_id": vote["user_id"],
        "id_vote": vote["id_vote"],
        "dataset_name": vote["dataset_name"],
        "dataset_description": vote["dataset_description"],
        "user_name": vote["user_name"],
        "calification": vote["calification"],
    }


def _by_user(vote):
    return {
        "user_id": vote["user_id"],
        "dataset_id": vote["dataset_id"],
        "id_vote": vote["id_vote"],
        "dataset_name": vote["dataset_name"],
        "dataset_description": vote["dataset_description"],
        "calification": vote["calification"],
    }


VOTE_PROJECTIONS = (
    Projection(DATASET_VOTE_TABLE, _by_dataset),
    Projection(VOTE_BY_USER_TABLE, _by_user),
)


class DatasetVoteRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(DATASET_VOTE_TABLE, storage)

    def get_by_dataset(self, dataset_id) -> list[dict]:
        return self.get_partition({"dataset_id": dataset_id})


class VoteByUserRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(VOTE_BY_USER_TABLE, storage)

    def get_by_user(self, user_id) -> list[dict]:
        return self.get_partition({"user_id": user_id})


class VoteWriter(DenormalizedWriter):
    """A vote is written to both vote tables in one unlogged batch."""

    def __init__(self, storage=None):
        super().__init__(*VOTE_PROJECTIONS, storage=storage)
