from flask import request
from flask_restful import Resource, Api
from voozea.service.search_service import global_search
from voozea.schemas.search_schema import SearchResultSchema
from . import search_bp

api = Api(search_bp)
search_result_schema = SearchResultSchema()


class GlobalSearch(Resource):
    def get(self):
        results = global_search(request.args.get("q", ""))
        return search_result_schema.dump(results), 200

api.add_resource(GlobalSearch, '/search')
