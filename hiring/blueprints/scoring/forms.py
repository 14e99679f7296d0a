from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, IntegerField, FloatField, BooleanField
from wtforms.validators import DataRequired, InputRequired, Optional, Length, NumberRange


class RubricForm(FlaskForm):
    criteria = StringField("Criteria", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional()])
    max_score = FloatField("Max score", default=10, validators=[Optional(), NumberRange(min=0.01)])
    weight = FloatField("Weight", default=1.0, validators=[Optional(), NumberRange(min=0.01)])


class RubricUpdateForm(FlaskForm):
    criteria = StringField("Criteria", validators=[Optional(), Length(max=255)])
    description = TextAreaField("Description", validators=[Optional()])
    max_score = FloatField("Max score", validators=[Optional(), NumberRange(min=0.01)])
    weight = FloatField("Weight", validators=[Optional(), NumberRange(min=0.01)])
    is_active = BooleanField("Active")


class ScoreForm(FlaskForm):
    application_id = IntegerField("Application", validators=[InputRequired()])
    rubric_id = IntegerField("Rubric", validators=[InputRequired()])
    score_value = FloatField("Score", validators=[InputRequired()])
    comments = TextAreaField("Comments", validators=[Optional()])


class ScoreUpdateForm(FlaskForm):
    score_value = FloatField("Score", validators=[InputRequired()])
    comments = TextAreaField("Comments", validators=[Optional()])
