from flask_restful import Resource, Api
from flask import request, g
from voozea.service.entity_service import resolve_entity, list_actable_entities, search_entities
from voozea.schemas.entity_schema import EntityInfoSchema
from voozea.utils.decorators import login_required
from . import entity_bp

api = Api(entity_bp)
entity_schema = EntityInfoSchema()
entities_schema = EntityInfoSchema(many=True)


class EntityResource(Resource):
    def get(self, entity_id):
        info = resolve_entity(entity_id)
        if info is None:
            return {"message": "Entity not found"}, 404
        return {"entity": entity_schema.dump(info)}, 200


# ---------------------------
# /entities/actable
# ---------------------------
class ActableEntities(Resource):
    @login_required
    def get(self):
        entities = list_actable_entities(g.current_user.id)
        return {"entities": entities_schema.dump(entities)}, 200


# ---------------------------
# /entities/search?q=&exclude=id1,id2
# ---------------------------
class EntitySearch(Resource):
    def get(self):
        exclude = [i for i in request.args.get("exclude", "").split(",") if i]
        results = search_entities(request.args.get("q", ""), exclude)
        return {"entities": entities_schema.dump(results)}, 200

api.add_resource(ActableEntities, '/entities/actable')
api.add_resource(EntitySearch, '/entities/search')
api.add_resource(EntityResource, '/entities/<string:entity_id>')
