from flask_wtf import FlaskForm
from wtforms import Field, validators

from core.exceptions import ValidationError


def as_text(value):
    """JSON bodies may carry ids as numbers; columns are text."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


class OptionalBooleanField(Field):
    """
    Tri-state boolean: ``None`` when the value is absent or empty,
    ``True``/``False`` for JSON booleans or the strings "true"/"false".
    Any other value is a validation error, never silently ``False``.
    """

    def process_data(self, value):
        self.data = value if isinstance(value, bool) else None

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] is None or valuelist[0] == "":
            self.data = None
            return

        raw = valuelist[0]
        if isinstance(raw, bool):
            self.data = raw
            return

        text = str(raw).strip().lower()
        if text == "true":
            self.data = True
        elif text == "false":
            self.data = False
        else:
            self.data = None
            raise ValueError(self.gettext("Not a valid boolean value, use true or false."))

    def _value(self):
        return "" if self.data is None else str(self.data).lower()


def boolean_required(form, field):
    if field.data is None and not field.errors:
        raise validators.StopValidation(field.gettext("This field is required (true or false)."))


def not_boolean(form, field):
    """JSON true/false must not pass as 1/0 in numeric fields."""
    if field.raw_data and isinstance(field.raw_data[0], bool):
        field.data = None
        raise validators.StopValidation(field.gettext("Not a valid integer value."))


class ApiForm(FlaskForm):
    """JSON API form: no CSRF token, errors raised as ValidationError."""

    class Meta:
        csrf = False

    def validate_or_raise(self):
        if not self.validate():
            missing = ", ".join(f"'{name}'" for name in self.errors)
            raise ValidationError(self.errors, message=f"Invalid or missing fields: {missing}")
        return self
