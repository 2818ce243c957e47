from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from app.modules.votes.models import MAX_CALIFICATION, MIN_CALIFICATION
from core.forms import ApiForm, as_text, not_boolean


class VoteForm(ApiForm):
    dataset_id = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
    user_id = StringField("User", filters=[as_text], validators=[DataRequired()])
    dataset_name = StringField("Dataset name", filters=[as_text], validators=[DataRequired()])
    dataset_description = StringField("Dataset description", filters=[as_text], validators=[Optional()])
    user_name = StringField("User name", filters=[as_text], validators=[DataRequired()])
    calification = IntegerField(
        "Calification",
        validators=[
            not_boolean,
            InputRequired(),
            NumberRange(
                min=MIN_CALIFICATION,
                max=MAX_CALIFICATION,
                message=f"'calification' must be a number between {MIN_CALIFICATION} and {MAX_CALIFICATION}",
            ),
        ],
    )


class VotesByDatasetForm(ApiForm):
    dataset_id = StringField("Dataset", filters=[as_text], validators=[DataRequired()])


class VotesByUserForm(ApiForm):
    user_id = StringField("User", filters=[as_text], validators=[DataRequired()])
