from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

base_bp = Blueprint("base", __name__)

@base_bp.route("/")
def home():
    return jsonify({"success": True, "message": "Welcome to the SIS API!"})

@base_bp.route("/api/health")
def health():
    from sis.extensions import db
    try:
        db.session.execute(text("SELECT 1"))
        return jsonify({"success": True, "status": "ok"})
    except SQLAlchemyError:
        current_app.logger.exception("Database health check failed")
        return jsonify({"success": False, "message": "Database unavailable"}), 500
