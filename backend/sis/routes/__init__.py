from .auth import auth_bp
from .students import students_bp
from .reports import reports_bp
from .base_route import base_bp

def register_routes(app):
    app.register_blueprint(base_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(students_bp, url_prefix='/api/students')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')
