from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, ValidationError

from core.forms import ApiForm, as_text


class StartConversationForm(ApiForm):
    id_user_one = StringField("User one", filters=[as_text], validators=[DataRequired()])
    id_user_two = StringField("User two", filters=[as_text], validators=[DataRequired()])
    user_one_name = StringField("User one name", filters=[as_text], validators=[DataRequired()])
    user_two_name = StringField("User two name", filters=[as_text], validators=[DataRequired()])

    def validate_id_user_two(self, field):
        if field.data == self.id_user_one.data:
            raise ValidationError("A conversation needs two different users.")


class UserConversationsForm(ApiForm):
    id_user = StringField("User", filters=[as_text], validators=[DataRequired()])


class MessageForm(ApiForm):
    id_conversation = StringField("Conversation", validators=[DataRequired()])
    id_user = StringField("User", filters=[as_text], validators=[DataRequired()])
    message = TextAreaField("Message", filters=[as_text], validators=[DataRequired()])


class ConversationForm(ApiForm):
    id_conversation = StringField("Conversation", validators=[DataRequired()])
