from flask import jsonify, request

from app.modules.downloads import downloads_bp
from app.modules.downloads.forms import DownloadForm, DownloadsByDatasetForm
from app.modules.downloads.services import DownloadService

download_service = DownloadService()


@downloads_bp.route("/record_new_download", methods=["POST"])
def record_new_download():
    form = DownloadForm().validate_or_raise()
    result = download_service.record_new_download(
        dataset_id=form.dataset_id.data,
        user_id=form.user_id.data,
        dataset_description=form.dataset_description.data,
        dataset_name=form.dataset_name.data,
        user_name=form.user_name.data,
    )
    return jsonify(result)


@downloads_bp.route("/get_downloads_by_dataset", methods=["GET"])
def get_downloads_by_dataset():
    form = DownloadsByDatasetForm(request.args).validate_or_raise()
    return jsonify(download_service.get_downloads_by_dataset(form.dataset_id.data))
