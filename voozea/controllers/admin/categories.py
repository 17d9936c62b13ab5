from flask import request
from flask_restful import Resource, Api
from voozea.service.category_service import create_category, update_category, delete_category, list_categories
from voozea.models.category import CATEGORY_TYPES
from voozea.utils.decorators import admin_required, service_errors
from voozea.schemas.category_schema import CategorySchema, CategoryInputSchema
from . import admin_bp

api = Api(admin_bp)
category_schema = CategorySchema()
categories_schema = CategorySchema(many=True)
category_input_schema = CategoryInputSchema()


class CategoryList(Resource):
    @admin_required
    def get(self):
        category_type = request.args.get("type")
        if category_type and category_type not in CATEGORY_TYPES:
            return {"message": f"type must be one of: {', '.join(CATEGORY_TYPES)}"}, 400
        return {"categories": categories_schema.dump(list_categories(category_type))}, 200

    @admin_required
    @service_errors
    def post(self):
        json_data = request.get_json(silent=True) or {}
        errors = category_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        category = create_category(json_data)
        return {"category": category_schema.dump(category), "message": "Category created"}, 201


class CategoryResource(Resource):
    @admin_required
    @service_errors
    def put(self, category_id):
        json_data = request.get_json(silent=True) or {}
        errors = category_input_schema.validate(json_data)
        if errors:
            return {"errors": errors}, 400

        category = update_category(category_id, json_data)
        return {"category": category_schema.dump(category), "message": "Category updated"}, 200

    @admin_required
    @service_errors
    def delete(self, category_id):
        delete_category(category_id)
        return {"message": "Category deleted"}, 200

api.add_resource(CategoryList, '/categories')
api.add_resource(CategoryResource, '/categories/<int:category_id>')
