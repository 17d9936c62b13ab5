from flask import request, g
from flask_restful import Resource, Api
from voozea.service.business_service import (
    create_business, update_business, get_business_by_slug, list_businesses,
)
from voozea.service.entity_service import get_business_role
from voozea.service.follow_service import is_following
from voozea.utils.decorators import login_required, login_optional, service_errors
from voozea.schemas.business_schema import BusinessSchema, BusinessInputSchema
from voozea.schemas.product_schema import ProductSchema
from . import business_bp

api = Api(business_bp)

# Schema instances
business_schema = BusinessSchema()
businesses_schema = BusinessSchema(many=True)
business_input_schema = BusinessInputSchema()
products_schema = ProductSchema(many=True, exclude=("business",))


# ---------------------------
# /businesses
# ---------------------------
class BusinessListResource(Resource):
    def get(self):
        businesses = list_businesses(
            category_id=request.args.get("category_id", type=int),
            limit=max(1, min(request.args.get("limit", default=50, type=int), 100)),
            offset=max(0, request.args.get("offset", default=0, type=int))
        )
        return {"businesses": businesses_schema.dump(businesses)}, 200

    @login_required
    @service_errors
    def post(self):
        json_data = request.get_json(silent=True) or {}

        errors = business_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        business = create_business(
            g.current_user,
            json_data,
            as_owner=bool(json_data.get("as_owner"))
        )
        return {
            "business": business_schema.dump(business),
            "message": "Business created successfully"
        }, 201


# ---------------------------
# GET /businesses/<slug>, PUT /businesses/<id>
# ---------------------------
class BusinessResource(Resource):
    @login_optional
    @service_errors
    def get(self, key):
        business = get_business_by_slug(key)
        viewer = g.current_user

        return {
            "business": business_schema.dump(business),
            "products": products_schema.dump(business.products),
            "role": get_business_role(business.id, viewer.id) if viewer else None,
            "is_following": bool(viewer and is_following(viewer.id, business.id))
        }, 200

    @login_required
    @service_errors
    def put(self, key):
        json_data = request.get_json(silent=True) or {}
        errors = business_input_schema.validate(json_data, partial=True)
        if errors:
            return {"errors": errors}, 400

        business = update_business(g.current_user, key, json_data)
        return {"business": business_schema.dump(business), "message": "Business updated successfully"}, 200

api.add_resource(BusinessListResource, '/businesses')
api.add_resource(BusinessResource, '/businesses/<string:key>')
