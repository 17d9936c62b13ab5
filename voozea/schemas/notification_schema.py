from marshmallow import fields
from voozea.extension import ma
from voozea.models import Notification
from voozea.schemas.business_schema import BusinessSchema


class NotificationSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Notification
        load_instance = True
        include_fk = True

    created_at = ma.DateTime(format="%Y-%m-%dT%H:%M:%S")
    business = fields.Nested(BusinessSchema, only=("id", "name", "slug"), dump_only=True)
