"""
Share Controller

Handles creating share codes for finished boards and opening received ones.
"""

from flask import Blueprint, request, jsonify
from ..errors import GameInProgress, InvalidToken
from ..utils.decorators import require_game_manager
from ..utils.game_logger import game_logger
from ..utils.helpers import get_json_body

share_bp = Blueprint('share', __name__)


@share_bp.route('/share', methods=['POST'])
@require_game_manager
def share_game(manager):
    """Create a share code and emoji text for a finished board."""
    data = get_json_body()
    board_index = data.get('board', 0)
    reveal_word = data.get('reveal_word', False) is True
    mode = manager.mode.value

    game_logger.log_user_action(request, 'share', mode, board=board_index, reveal_word=reveal_word)

    if not isinstance(board_index, int) or not 0 <= board_index < len(manager.boards):
        error_response = {'success': False, 'error': 'Board not found'}
        game_logger.log_server_response(request, 'share', False, error_response, mode)
        return jsonify(error_response), 400

    try:
        response_data = {
            'success': True,
            'token': manager.share(board_index, reveal_word),
            'text': manager.share_text(board_index)
        }
        game_logger.log_server_response(request, 'share', True, response_data, mode)
        return jsonify(response_data)

    except GameInProgress as e:
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'share', False, error_response, mode)
        return jsonify(error_response), 409
    except Exception as e:
        game_logger.log_error(request, e, 'share', mode)
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'share', False, error_response, mode)
        return jsonify(error_response), 500


@share_bp.route('/shared/<token>', methods=['GET'])
@require_game_manager
def open_shared(manager, token):
    """Decode a received share code into a read-only replay."""
    game_logger.log_user_action(request, 'open_shared', token_length=len(token))

    try:
        shared = manager.open_shared(token)
        response_data = {
            'success': True,
            'shared': shared.to_dict()
        }
        game_logger.log_server_response(request, 'open_shared', True, response_data, shared.mode.value)
        return jsonify(response_data)

    except InvalidToken:
        error_response = {'success': False, 'error': 'Cannot display shared game'}
        game_logger.log_server_response(request, 'open_shared', False, error_response)
        return jsonify(error_response), 400
    except Exception as e:
        game_logger.log_error(request, e, 'open_shared')
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'open_shared', False, error_response)
        return jsonify(error_response), 500
