from werkzeug.datastructures import MultiDict
from wtforms import Form, StringField, IntegerField, DecimalField
from wtforms.validators import AnyOf, InputRequired, DataRequired, Length, NumberRange, Optional

from inventory_lib import FIRST_AUTOMOBILE_YEAR, MAX_TEXT_LENGTH

# Accepted answers for the transmission prompt
TRANSMISSION_ANSWERS = {
    'y': True, 'yes': True, 'a': True, 'automatic': True, 'true': True,
    'n': False, 'no': False, 'm': False, 'manual': False, 'false': False,
    'u': None, 'unknown': None, '?': None,
}


def _normalize(value):
    return (value or '').strip().lower()


class FiniteDecimalField(DecimalField):
    """DecimalField that refuses NaN and Infinity"""

    def process_formdata(self, valuelist):
        super().process_formdata(valuelist)
        if self.data is not None and not self.data.is_finite():
            self.data = None
            raise ValueError(self.gettext("Not a finite decimal value."))


def bind_form(form_class, answers):
    """Build a form from console answers keyed by field name"""
    return form_class(formdata=MultiDict(answers))


def first_error(form):
    for name, messages in form.errors.items():
        return f"{form[name].label.text}: {messages[0]}"
    return None


class VehicleForm(Form):
    year = IntegerField('Year', validators=[InputRequired(), NumberRange(min=FIRST_AUTOMOBILE_YEAR)])
    make = StringField('Make', validators=[DataRequired(), Length(max=MAX_TEXT_LENGTH)])
    model = StringField('Model', validators=[DataRequired(), Length(max=MAX_TEXT_LENGTH)])
    price = FiniteDecimalField('Price ($)', validators=[InputRequired(), NumberRange(min=0)])
    is_automatic = StringField('Automatic (y/n, blank if unknown)', filters=[_normalize],
                               validators=[AnyOf(list(TRANSMISSION_ANSWERS) + [''])])

    def to_kwargs(self):
        return {
            'year': self.year.data,
            'make': self.make.data,
            'model': self.model.data,
            'price': self.price.data,
            'is_automatic': TRANSMISSION_ANSWERS.get(self.is_automatic.data),
        }


class VehicleUpdateForm(Form):
    """Every field is optional; a blank answer keeps the stored value"""
    year = IntegerField('Year', validators=[Optional(), NumberRange(min=FIRST_AUTOMOBILE_YEAR)])
    make = StringField('Make', validators=[Optional(), Length(max=MAX_TEXT_LENGTH)])
    model = StringField('Model', validators=[Optional(), Length(max=MAX_TEXT_LENGTH)])
    price = FiniteDecimalField('Price ($)', validators=[Optional(), NumberRange(min=0)])
    is_automatic = StringField('Automatic (y/n/unknown)', filters=[_normalize],
                               validators=[Optional(), AnyOf(list(TRANSMISSION_ANSWERS))])

    def changes(self):
        changed = {}
        if self.year.data is not None:
            changed['year'] = self.year.data
        for name in ('make', 'model'):
            if self[name].data and self[name].data.strip():
                changed[name] = self[name].data
        if self.price.data is not None:
            changed['price'] = self.price.data
        if self.is_automatic.data:
            changed['is_automatic'] = TRANSMISSION_ANSWERS[self.is_automatic.data]
        return changed


class VehicleIdForm(Form):
    vehicle_id = IntegerField('Vehicle ID', validators=[InputRequired(), NumberRange(min=1)])
