import logging
from datetime import datetime, timezone

from app.modules.downloads.repositories import DownloadRepository
from core.services.BaseService import BaseService

logger = logging.getLogger(__name__)


class DownloadService(BaseService):
    def __init__(self, storage=None):
        super().__init__(DownloadRepository(storage))

    def record_new_download(self, dataset_id, user_id, dataset_description, dataset_name, user_name):
        """
        Register that ``user_id`` downloaded ``dataset_id``. Only the first
        download per user is stored; ``inserted`` is False for repeats.
        """
        inserted = self.repository.record(
            dataset_id=dataset_id,
            user_id=user_id,
            dataset_name=dataset_name,
            dataset_description=dataset_description,
            user_name=user_name,
            downloaded_at=datetime.now(timezone.utc),
        )
        if not inserted:
            logger.debug(f"Download of dataset {dataset_id} by user {user_id} was already recorded")

        return {
            "dataset_id": dataset_id,
            "user_id": user_id,
            "dataset_description": dataset_description,
            "dataset_name": dataset_name,
            "user_name": user_name,
            "inserted": inserted,
        }

    def get_downloads_by_dataset(self, dataset_id) -> list[dict]:
        return self.repository.get_by_dataset(dataset_id)
