from core.storage.schema import Table
from core.storage.statements import ASC

# One row per (dataset, user): a repeated download is rejected by IF NOT EXISTS
DOWNLOAD_TABLE = Table(
    name="download_by_dataset",
    columns=(
        ("dataset_id", "text"),
        ("user_id", "text"),
        ("dataset_name", "text"),
        ("dataset_description", "text"),
        ("user_name", "text"),
        ("downloaded_at", "timestamp"),
    ),
    partition_key=("dataset_id",),
    clustering=(("user_id", ASC),),
)

TABLES = (DOWNLOAD_TABLE,)
