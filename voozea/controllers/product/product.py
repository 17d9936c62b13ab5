from flask import request, g
from flask_restful import Resource, Api
from voozea.service.product_service import (
    create_product, update_product, update_product_attributes, get_product,
)
from voozea.service.entity_service import get_business_role
from voozea.service.rating_service import liked_rating_ids
from voozea.utils.decorators import login_required, login_optional, service_errors
from voozea.schemas.product_schema import ProductSchema, ProductInputSchema, ProductAttributesSchema
from voozea.schemas.rating_schema import RatingSchema
from . import product_bp

api = Api(product_bp)

product_schema = ProductSchema()
product_input_schema = ProductInputSchema()
product_attributes_schema = ProductAttributesSchema()
ratings_schema = RatingSchema(many=True, exclude=("product",))


class BusinessProducts(Resource):
    @login_required
    @service_errors
    def post(self, business_id):
        json_data = request.get_json(silent=True) or {}
        errors = product_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        product = create_product(g.current_user, business_id, json_data)
        return {"product": product_schema.dump(product), "message": "Product created"}, 201


class ProductResource(Resource):
    @login_optional
    @service_errors
    def get(self, product_id):
        product, ratings = get_product(product_id)
        viewer = g.current_user
        liked = liked_rating_ids(viewer, ratings)

        dumped = ratings_schema.dump(ratings)
        for rating in dumped:
            rating["liked"] = rating["id"] in liked

        return {
            "product": product_schema.dump(product),
            "ratings": dumped,
            "can_edit": bool(viewer and get_business_role(product.business_id, viewer.id))
        }, 200

    @login_required
    @service_errors
    def patch(self, product_id):
        json_data = request.get_json(silent=True) or {}
        errors = product_input_schema.validate(json_data, partial=True)
        if errors:
            return {"errors": errors}, 400

        product = update_product(g.current_user, product_id, json_data)
        return {"product": product_schema.dump(product), "message": "Product updated"}, 200


class ProductAttributes(Resource):
    @login_required
    @service_errors
    def put(self, product_id):
        json_data = request.get_json(silent=True) or {}
        errors = product_attributes_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        product = update_product_attributes(g.current_user, product_id, json_data["attributes"])
        return {"product": product_schema.dump(product), "message": "Attributes updated"}, 200

api.add_resource(BusinessProducts, '/businesses/<string:business_id>/products')
api.add_resource(ProductResource, '/products/<int:product_id>')
api.add_resource(ProductAttributes, '/products/<int:product_id>/attributes')
