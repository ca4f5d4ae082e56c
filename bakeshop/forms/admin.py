"""Admin panel forms."""

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import (StringField, TextAreaField, FloatField, IntegerField,
                     BooleanField, RadioField)
from wtforms.fields import DateField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError


class ImageFieldsMixin:
    """Either an uploaded picture or an image URL.

    Set ``image_required = False`` when editing a row that already has one.
    """
    image_required = True

    def has_upload(self):
        return bool(self.image.data and getattr(self.image.data, 'filename', ''))

    def check_image(self):
        if self.image_required and not self.has_upload() and not self.image_url.data:
            self.image_url.errors.append('Please upload an image or enter an image URL.')
            return False
        return True


class ItemForm(ImageFieldsMixin, FlaskForm):
    """Create or edit a bakery item."""
    name = StringField('Item Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=150)
    ])
    price = FloatField('Price', validators=[
        DataRequired(message='Price is required'),
        NumberRange(min=0.01, message='Price must be positive')
    ])
    description = TextAreaField('Description', validators=[Optional(), Length(max=2000)])
    category = StringField('Category', default='cakes', validators=[
        DataRequired(message='Category is required'),
        Length(max=100)
    ])
    image = FileField('Upload Image')
    image_url = StringField('Image URL', validators=[Optional(), Length(max=500)])
    is_on_sale = BooleanField('On Sale')
    sale_percentage = IntegerField('Sale Percentage', validators=[
        Optional(),
        NumberRange(min=1, max=99, message='Sale percentage must be between 1 and 99')
    ])

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators):
            return False
        valid = self.check_image()
        if self.is_on_sale.data and self.sale_percentage.data is None:
            self.sale_percentage.errors.append('Enter a sale percentage for items on sale.')
            valid = False
        return valid


class GlobalSaleForm(FlaskForm):
    """Create or edit a site-wide sale."""
    name = StringField('Sale Name', validators=[
        DataRequired(message='Sale name is required'),
        Length(max=150)
    ])
    description = TextAreaField('Description', validators=[Optional(), Length(max=1000)])
    discount_percentage = IntegerField('Discount Percentage', validators=[
        DataRequired(message='Discount percentage is required'),
        NumberRange(min=1, max=100, message='Discount must be between 1 and 100')
    ])
    start_date = DateField('Start Date', validators=[Optional()])
    end_date = DateField('End Date', validators=[Optional()])

    def validate_end_date(self, field):
        if field.data and self.start_date.data and field.data < self.start_date.data:
            raise ValidationError('End date must be after the start date.')


class BannerForm(FlaskForm):
    """Upload a carousel banner."""
    banner_type = RadioField('Banner Type', choices=[('image', 'Image'), ('video', 'Video')],
                             default='image')
    file = FileField('Banner File', validators=[FileRequired(message='Please choose a file')])


class LogoForm(FlaskForm):
    """Upload the shop logo."""
    file = FileField('Logo', validators=[FileRequired(message='Please choose a file')])


class SignatureItemForm(ImageFieldsMixin, FlaskForm):
    """Create or edit a signature showcase item."""
    title = StringField('Title', validators=[
        DataRequired(message='Title is required'),
        Length(max=150)
    ])
    category = StringField('Category', default='cakes', validators=[
        DataRequired(message='Category is required'),
        Length(max=100)
    ])
    display_order = IntegerField('Display Order', default=0, validators=[
        Optional(),
        NumberRange(min=0)
    ])
    image = FileField('Upload Image')
    image_url = StringField('Image URL', validators=[Optional(), Length(max=500)])

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators):
            return False
        return self.check_image()
