from flask import request, g
from flask_restful import Resource, Api
from voozea.service.notification_service import list_notifications, unread_count, mark_read, mark_all_read
from voozea.utils.decorators import login_required, service_errors
from voozea.schemas.entity_schema import EntityInfoSchema
from voozea.schemas.notification_schema import NotificationSchema
from . import notification_bp

api = Api(notification_bp)
notification_schema = NotificationSchema()
actor_schema = EntityInfoSchema()


class Notifications(Resource):
    @login_required
    def get(self):
        limit = max(1, min(request.args.get("limit", default=50, type=int), 100))
        items = []
        for notification, actor in list_notifications(g.current_user.id, limit=limit):
            data = notification_schema.dump(notification)
            data["actor"] = actor_schema.dump(actor) if actor else None
            items.append(data)

        return {
            "notifications": items,
            "unread_count": unread_count(g.current_user.id)
        }, 200


class NotificationRead(Resource):
    @login_required
    @service_errors
    def post(self, notification_id):
        notification = mark_read(g.current_user.id, notification_id)
        return {"notification": notification_schema.dump(notification)}, 200


class NotificationsReadAll(Resource):
    @login_required
    @service_errors
    def post(self):
        return {"updated": mark_all_read(g.current_user.id)}, 200

api.add_resource(Notifications, '/notifications')
api.add_resource(NotificationRead, '/notifications/<int:notification_id>/read')
api.add_resource(NotificationsReadAll, '/notifications/read-all')
