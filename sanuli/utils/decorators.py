"""
Route Decorators

Contains decorators shared by the HTTP controllers.
"""

from functools import wraps
from flask import jsonify


def require_game_manager(f):
    """
    Decorator for endpoints that need the game manager.

    Answers 500 when the manager has not been initialized, otherwise passes
    it to the view as the `manager` keyword argument.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_manager import get_game_manager

        manager = get_game_manager()
        if not manager:
            return jsonify({
                'success': False,
                'error': 'Game manager unavailable'
            }), 500

        kwargs['manager'] = manager
        return f(*args, **kwargs)

    return decorated_function
