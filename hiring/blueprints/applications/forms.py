from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, IntegerField, FloatField, DateTimeField
from wtforms.validators import DataRequired, InputRequired, Optional, Length, NumberRange, AnyOf
from ...models.application import ApplicationStatus, ApplicationResult

# ISO-8601 as sent by the frontend, with or without seconds / UTC marker
DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%SZ",
                    "%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"]


class ApplicationForm(FlaskForm):
    program = StringField("Program", validators=[DataRequired(), Length(max=200)])
    position = StringField("Position", validators=[Optional(), Length(max=200)])
    subject_specialization = StringField("Subject specialization", validators=[Optional(), Length(max=200)])
    educational_background = TextAreaField("Educational background", validators=[Optional()])
    teaching_experience = TextAreaField("Teaching experience", validators=[Optional()])
    motivation = TextAreaField("Motivation", validators=[Optional()])


class DecisionForm(FlaskForm):
    hr_notes = TextAreaField("HR notes", validators=[Optional()])


class DemoScheduleForm(FlaskForm):
    demo_schedule = DateTimeField("Demo schedule", format=DATETIME_FORMATS, validators=[InputRequired()])
    demo_location = StringField("Location", validators=[Optional(), Length(max=255)])
    demo_duration = IntegerField("Duration (minutes)", validators=[Optional(), NumberRange(min=1)])
    demo_notes = TextAreaField("Notes", validators=[Optional()])
    reason = StringField("Reschedule reason", validators=[Optional(), Length(max=50)])


class ApplicationUpdateForm(FlaskForm):
    status = StringField("Status", validators=[Optional(), AnyOf(ApplicationStatus.ALL)])
    result = StringField("Result", validators=[Optional(), AnyOf(ApplicationResult.ALL)])
    total_score = FloatField("Total score", validators=[Optional(), NumberRange(min=0, max=100)])
    demo_location = StringField("Location", validators=[Optional(), Length(max=255)])
    demo_duration = IntegerField("Duration (minutes)", validators=[Optional(), NumberRange(min=1)])
    demo_notes = TextAreaField("Notes", validators=[Optional()])
    hr_notes = TextAreaField("HR notes", validators=[Optional()])


class CompleteForm(FlaskForm):
    total_score = FloatField("Total score", validators=[InputRequired(), NumberRange(min=0, max=100)])
    result = StringField("Result", validators=[InputRequired(), AnyOf(ApplicationResult.ALL)])


class InterviewScheduleForm(FlaskForm):
    scheduled_at = DateTimeField("Interview schedule", format=DATETIME_FORMATS, validators=[InputRequired()])


class InterviewResultForm(FlaskForm):
    result = StringField("Result", validators=[InputRequired(), AnyOf(ApplicationResult.ALL)])
