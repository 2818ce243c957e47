from datetime import datetime

from app.modules.downloads.models import DOWNLOAD_TABLE
from core.repositories.BaseRepository import BaseRepository, external_row


def _download_row(row):
    record = external_row(row)
    if isinstance(record.get("downloaded_at"), datetime):
        record["downloaded_at"] = record["downloaded_at"].isoformat()
    return record


class DownloadRepository(BaseRepository):
    def __init__(self, storage=None):
        super().__init__(DOWNLOAD_TABLE, storage)

    def record(self, **download) -> bool:
        return self.insert_if_not_exists(**download)

    def get_by_dataset(self, dataset_id) -> list[dict]:
        return self.get_partition({"dataset_id": dataset_id}, row_mapper=_download_row)
