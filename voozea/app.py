from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv
from voozea.extension import db, migrate, jwt, ma
from voozea.routes_controller import register_routes
import os
from datetime import timedelta
import logging


load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def create_app(config_overrides=None):
    app = Flask(__name__)

    # Defaults, overridable through FLASK_* environment variables
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///voozea.db"
    app.config["AUTO_CREATE_TABLES"] = True
    app.config["SEED_ON_STARTUP"] = False
    app.config["LOG_LEVEL"] = "INFO"
    # let Flask-RESTful hand JWT errors on to the JWTManager handlers
    app.config["PROPAGATE_EXCEPTIONS"] = True

    # JWT Configuration
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "fallback-secret-key")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours=24)
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_HEADER_NAME"] = "Authorization"
    app.config["JWT_HEADER_TYPE"] = "Bearer"

    # Database Configuration
    app.config.from_prefixed_env()
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
        "pool_pre_ping": True
    }

    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    CORS(app,
         supports_credentials=True,
         origins=[o.strip() for o in origins.split(",") if o.strip()],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"],
         expose_headers=["Authorization"],
         max_age=3600
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    with app.app_context():
        import voozea.models  # noqa: F401  (register tables)

        if app.config["AUTO_CREATE_TABLES"]:
            db.create_all()
        if app.config["SEED_ON_STARTUP"]:
            from voozea.seed import seed
            seed()

    # Register routes
    register_routes(app)

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.error(f"Unhandled error: {e}", exc_info=True)
        return jsonify({"message": "Internal server error"}), 500

    @app.route('/')
    def home():
        return {"message": "Welcome to Voozea API"}

    # Add JWT error handlers
    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return {
            "message": "Invalid token",
            "error": str(error)
        }, 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return {
            "message": "Missing authorization token",
            "error": str(error)
        }, 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return {"message": "Token has expired"}, 401

    return app
