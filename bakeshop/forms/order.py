"""Customer order forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, IntegerField
from wtforms.validators import DataRequired, Email, Length, InputRequired, Optional


class CustomerForm(FlaskForm):
    """Contact details collected at checkout."""
    customer_name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100)
    ])
    customer_email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    customer_phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        Length(max=20)
    ])
    customer_address = TextAreaField('Delivery Address', validators=[
        DataRequired(message='Address is required'),
        Length(max=500)
    ])
    special_notes = TextAreaField('Special Notes', validators=[
        Optional(),
        Length(max=1000)
    ])

    def customer_data(self):
        return {
            'customer_name': self.customer_name.data.strip(),
            'customer_email': self.customer_email.data.strip().lower(),
            'customer_phone': self.customer_phone.data.strip(),
            'customer_address': self.customer_address.data.strip(),
            'special_notes': (self.special_notes.data or '').strip() or None,
        }


class OrderForm(CustomerForm):
    """Single item order. Quantity is range-checked by the order service."""
    quantity = IntegerField('Quantity', default=1, validators=[
        InputRequired(message='Quantity is required')
    ])
