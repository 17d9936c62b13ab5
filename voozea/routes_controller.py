from voozea.controllers.auth import auth_bp
from voozea.controllers.entity import entity_bp
from voozea.controllers.profile import profile_bp
from voozea.controllers.business import business_bp
from voozea.controllers.team import team_bp
from voozea.controllers.product import product_bp
from voozea.controllers.rating import rating_bp
from voozea.controllers.notification import notification_bp
from voozea.controllers.admin import admin_bp
from voozea.controllers.search import search_bp

def register_routes(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(entity_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(business_bp)
    app.register_blueprint(team_bp)
    app.register_blueprint(product_bp)
    app.register_blueprint(rating_bp)
    app.register_blueprint(notification_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(search_bp)
