from wtforms import StringField
from wtforms.validators import DataRequired

from core.forms import ApiForm, as_text


class DownloadForm(ApiForm):
    dataset_id = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
    user_id = StringField("User", filters=[as_text], validators=[DataRequired()])
    dataset_description = StringField("Dataset description", filters=[as_text], validators=[DataRequired()])
    dataset_name = StringField("Dataset name", filters=[as_text], validators=[DataRequired()])
    user_name = StringField("User name", filters=[as_text], validators=[DataRequired()])


class DownloadsByDatasetForm(ApiForm):
    dataset_id = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
