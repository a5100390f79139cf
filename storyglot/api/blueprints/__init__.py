"""
API Routes
"""
from .config_routes import create_config_blueprint
from .session_routes import create_session_blueprint
from .translation_routes import create_translation_blueprint

__all__ = [
    'create_config_blueprint',
    'create_session_blueprint',
    'create_translation_blueprint'
]
