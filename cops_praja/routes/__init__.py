from .main_routes import main_bp
from .exam_routes import exam_bp

__all__ = ['main_bp', 'exam_bp']
