from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, HiddenField, BooleanField, SubmitField
from wtforms.validators import DataRequired, Optional, Length, Regexp

from portfolio.download_requests import EMAIL_RE


class DownloadRequestForm(FlaskForm):
    name = StringField('Name', validators=[
        DataRequired(message="Name is required"),
        Length(max=200, message="Name is too long (max 200 characters)")
    ])
    email = StringField('Email', validators=[
        DataRequired(message="Email is required"),
        Regexp(EMAIL_RE, message="Invalid email address")
    ])
    institution = StringField('Institution (optional)', validators=[
        Optional(),
        Length(max=300, message="Institution is too long (max 300 characters)")
    ])
    purpose = TextAreaField('Purpose of request', validators=[
        DataRequired(message="Please tell us how you intend to use the publication"),
        Length(max=2000, message="Purpose is too long (max 2000 characters)")
    ])
    publication_id = HiddenField('Publication', validators=[
        DataRequired(message="No publication selected")
    ])
    agree_to_terms = BooleanField('I agree to the terms of use', validators=[
        DataRequired(message="You must agree to the terms of use")
    ])
    submit = SubmitField('Submit Request')

    def to_payload(self) -> dict:
        """Field values keyed the way the request endpoint expects them."""
        return {
            'name': self.name.data,
            'email': self.email.data,
            'institution': self.institution.data,
            'purpose': self.purpose.data,
            'publicationId': self.publication_id.data,
            'agreeToTerms': self.agree_to_terms.data,
        }
