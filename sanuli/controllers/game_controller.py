"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..errors import GameInProgress, GameOver, InvalidWord, PersistenceFailed
from ..models.game import GameMode, WordListScope
from ..utils.decorators import require_game_manager
from ..utils.game_logger import game_logger
from ..utils.helpers import get_json_body

game_bp = Blueprint('game', __name__)


def _error_response(action, error, status_code, mode=None, message=None):
    """Log a failed request and build its JSON response."""
    if status_code >= 500:
        game_logger.log_error(request, error, action, mode)

    error_response = {
        'success': False,
        'error': message or str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, mode,
                                    error_type=type(error).__name__)
    return jsonify(error_response), status_code


def _state_response(action, manager, **extra):
    response_data = {
        'success': True,
        'state': manager.to_dict(),
        **extra
    }
    game_logger.log_server_response(request, action, True, response_data, manager.mode.value)
    return jsonify(response_data)


@game_bp.route('/state', methods=['GET'])
@require_game_manager
def get_state(manager):
    """Get the current mode's round, streak and settings."""
    try:
        game_logger.log_user_action(request, 'get_state', manager.mode.value)
        manager.refresh()
        return _state_response('get_state', manager)

    except Exception as e:
        return _error_response('get_state', e, 500, manager.mode.value)


@game_bp.route('/mode', methods=['POST'])
@require_game_manager
def change_mode(manager):
    """Switch game mode, resuming that mode's unfinished round."""
    data = get_json_body()
    mode_id = data.get('mode')

    game_logger.log_user_action(request, 'change_mode', manager.mode.value, new_mode=mode_id)

    try:
        new_mode = GameMode(mode_id)
    except ValueError as e:
        modes = ', '.join(mode.value for mode in GameMode)
        return _error_response('change_mode', e, 400, message=f'Invalid game mode. Must be one of: {modes}')

    try:
        manager.change_mode(new_mode)
        return _state_response('change_mode', manager)

    except Exception as e:
        return _error_response('change_mode', e, 500, mode_id)


@game_bp.route('/previous_mode', methods=['POST'])
@require_game_manager
def change_previous_mode(manager):
    """Return to the mode played before the current one."""
    try:
        game_logger.log_user_action(request, 'previous_mode', manager.mode.value)
        manager.change_previous_mode()
        return _state_response('previous_mode', manager)

    except Exception as e:
        return _error_response('previous_mode', e, 500)


@game_bp.route('/guess', methods=['POST'])
@require_game_manager
def make_guess(manager):
    """Submit a guess to every unfinished board of the current round."""
    data = get_json_body()
    guess = data.get('guess')
    mode = manager.mode.value

    if not isinstance(guess, str) or not guess:
        return _error_response('submit_guess', ValueError('Guess is required'), 400, mode)

    game_logger.log_user_action(request, 'submit_guess', mode, guess_length=len(guess))

    try:
        boards = manager.submit_guess(guess)
        return _state_response('submit_guess', manager, updated_boards=[
            index for index, board in enumerate(manager.boards)
            if any(board is updated for updated in boards)
        ])

    except InvalidWord as e:
        return _error_response('submit_guess', e, 400, mode, message=e.reason)
    except GameOver as e:
        return _error_response('submit_guess', e, 409, mode)
    except PersistenceFailed as e:
        return _error_response('submit_guess', e, 503, mode, message='Guess could not be saved, try again')
    except Exception as e:
        return _error_response('submit_guess', e, 500, mode)


@game_bp.route('/new_game', methods=['POST'])
@require_game_manager
def new_game(manager):
    """Start the next word once the current round has ended."""
    mode = manager.mode.value
    try:
        game_logger.log_user_action(request, 'new_game', mode)
        manager.new_game()
        return _state_response('new_game', manager)

    except GameInProgress as e:
        return _error_response('new_game', e, 409, mode)
    except Exception as e:
        return _error_response('new_game', e, 500, mode)


@game_bp.route('/settings', methods=['POST'])
@require_game_manager
def update_settings(manager):
    """Change word list scope, profanity filter or theme."""
    data = get_json_body()
    game_logger.log_user_action(request, 'update_settings', manager.mode.value, changes=data)

    try:
        scope = data.get('word_list_scope')
        word_list_scope = WordListScope(scope) if scope is not None else None

        flags = {}
        for key in ('profanity_filter', 'colorblind_theme'):
            if key in data:
                if not isinstance(data[key], bool):
                    raise ValueError(f"'{key}' must be true or false")
                flags[key] = data[key]
    except ValueError as e:
        return _error_response('update_settings', e, 400)

    try:
        manager.update_settings(word_list_scope=word_list_scope, **flags)
        return _state_response('update_settings', manager)

    except Exception as e:
        return _error_response('update_settings', e, 500)


@game_bp.route('/keyboard', methods=['GET'])
@require_game_manager
def keyboard(manager):
    """Keyboard colouring derived from the guesses of one board."""
    board_index = request.args.get('board', 0, type=int)
    if not 0 <= board_index < len(manager.boards):
        return _error_response('keyboard', IndexError(board_index), 400, message='Board not found')

    try:
        states = manager.keyboard(board_index)
        response_data = {
            'success': True,
            'keys': {letter: state.value for letter, state in states.items()}
        }
        return jsonify(response_data)

    except Exception as e:
        return _error_response('keyboard', e, 500)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    from ..services.game_manager import get_game_manager

    try:
        manager = get_game_manager()
        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if manager else 'degraded',
            'manager_available': manager is not None,
            'words': len(manager.corpus) if manager else 0,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
