from flask_restful import Resource, Api
from voozea.service.admin_service import admin_stats
from voozea.utils.decorators import admin_required
from . import admin_bp

api = Api(admin_bp)


class AdminStats(Resource):
    @admin_required
    def get(self):
        return {"stats": admin_stats()}, 200

api.add_resource(AdminStats, '/stats')
