from flask import Blueprint, current_app, jsonify, request

from reflexboard import get_services
from reflexboard.errors import SubmissionRejected
from reflexboard.services.submissions import SERVER_ERROR

main = Blueprint('main', __name__)


@main.route('/healthz')
def healthz():
    return jsonify({'ok': True})


@main.route('/score', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    token = data.get('token')
    try:
        # the client reports the number of completed trials as `score`
        get_services().gateway.submit(token, data.get('average'), data.get('best'), data.get('score'))
    except SubmissionRejected as exc:
        prefix = token[:6] if isinstance(token, str) else None
        current_app.logger.info(f"[score-reject] reason={exc.reason} token={prefix}...")
        return jsonify({'ok': False, 'error': exc.reason}), exc.status_code
    except Exception:
        current_app.logger.exception('[score-error] submission failed after token was consumed')
        return jsonify({'ok': False, 'error': SERVER_ERROR}), 500
    return jsonify({'ok': True})
