import logging

from app.modules.votes.repositories import DatasetVoteRepository, VoteByUserRepository, VoteWriter
from core.services.BaseService import BaseService
from core.storage.timeuuid import new_timeuuid

logger = logging.getLogger(__name__)


class VoteService(BaseService):
    def __init__(self, storage=None):
        super().__init__(DatasetVoteRepository(storage))
        self.by_user_repository = VoteByUserRepository(storage)
        self.writer = VoteWriter(storage)

    def add_dataset_vote(self, dataset_id, user_id, dataset_name, user_name, calification, dataset_description=None):
        """
        Record a 1-5 rating. There is no check for an earlier vote by the same
        user: voting twice stores two votes.
        """
        vote = {
            "dataset_id": dataset_id,
            "user_id": user_id,
            "id_vote": new_timeuuid(),
            "dataset_name": dataset_name,
            "dataset_description": dataset_description,
            "user_name": user_name,
            "calification": calification,
        }
        self.writer.write(vote)
        logger.info(f"User {user_id} rated dataset {dataset_id} with {calification}")

        return {
            "dataset_id": dataset_id,
            "user_id": user_id,
            "dataset_name": dataset_name,
            "dataset_description": dataset_description,
            "user_name": user_name,
            "calification": calification,
            "id_vote": str(vote["id_vote"]),
            "created": True,
        }

    def get_votes_by_dataset(self, dataset_id) -> list[dict]:
        return self.repository.get_by_dataset(dataset_id)

    def get_votes_by_user(self, user_id) -> list[dict]:
        return self.by_user_repository.get_by_user(user_id)

    def get_dataset_rating(self, dataset_id):
        votes = self.get_votes_by_dataset(dataset_id)
        califications = [v["calification"] for v in votes if v.get("calification") is not None]
        average = round(sum(califications) / len(califications), 2) if califications else None
        return {"dataset_id": dataset_id, "votes": len(califications), "average": average}
