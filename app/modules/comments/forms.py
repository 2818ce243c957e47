from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired

from core.forms import ApiForm, OptionalBooleanField, as_text, boolean_required


class CommentForm(ApiForm):
    id_dataset = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
    user_name = StringField("User name", filters=[as_text], validators=[DataRequired()])
    comment = TextAreaField("Comment", filters=[as_text], validators=[DataRequired()])
    visible = OptionalBooleanField("Visible")


class CommentFilterForm(ApiForm):
    id_dataset = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
    visible = OptionalBooleanField("Visible")


class CommentVisibilityForm(ApiForm):
    id_dataset = StringField("Dataset", filters=[as_text], validators=[DataRequired()])
    id_comment = StringField("Comment", validators=[DataRequired()])
    visible = OptionalBooleanField("Visible", validators=[boolean_required])


class ReplyForm(ApiForm):
    id_comment = StringField("Comment", validators=[DataRequired()])
    username = StringField("User name", filters=[as_text], validators=[DataRequired()])
    reply = TextAreaField("Reply", filters=[as_text], validators=[DataRequired()])
    visible = OptionalBooleanField("Visible")


class ReplyFilterForm(ApiForm):
    id_comment = StringField("Comment", validators=[DataRequired()])
    visible = OptionalBooleanField("Visible")


class ReplyVisibilityForm(ApiForm):
    id_comment = StringField("Comment", validators=[DataRequired()])
    reply_id = StringField("Reply", validators=[DataRequired()])
    visible = OptionalBooleanField("Visible", validators=[boolean_required])
