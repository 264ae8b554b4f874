"""Endpoints for the chat command handler.

The bot front end calls these when a user runs ``/play`` (issue a link) or
``/leaderboard`` (refresh the channel's message). They are guarded by a
shared key, not by user identity.
"""

import hmac
from functools import wraps

from flask import Blueprint, current_app, jsonify, request

from reflexboard import get_services
from reflexboard.services.leaderboard import render_leaderboard
from reflexboard.services.tokens import HolderContext, build_play_link, link_message

admin = Blueprint('admin', __name__)


def require_admin_key(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get('ADMIN_API_KEY')
        if not expected:
            return jsonify({'ok': False, 'error': 'admin_api_disabled'}), 503
        presented = request.headers.get('X-Admin-Key', '')
        if not hmac.compare_digest(presented.encode(), expected.encode()):
            return jsonify({'ok': False, 'error': 'unauthorized'}), 401
        return view(*args, **kwargs)
    return wrapper


@admin.route('/tokens', methods=['POST'])
@require_admin_key
def issue_token():
    data = request.get_json(silent=True) or {}
    channel_id = data.get('channel_id')
    user_id = data.get('user_id')
    username = data.get('username')
    if not all(isinstance(v, str) and v for v in (channel_id, user_id, username)):
        return jsonify({'ok': False, 'error': 'channel_id, user_id and username are required'}), 400

    tokens = get_services().tokens
    token = tokens.create(HolderContext(channel_id=channel_id, user_id=user_id, username=username))
    link = build_play_link(current_app.config['PUBLIC_URL'], token)
    current_app.logger.info(f"[token-issue] channel={channel_id} user={user_id} token={token[:6]}...")
    return jsonify({
        'token': token,
        'link': link,
        'expires_in': tokens.ttl_sec,
        'message': link_message(link, tokens.ttl_sec),
    }), 201


@admin.route('/leaderboard/<string:channel_id>/refresh', methods=['POST'])
@require_admin_key
def refresh_leaderboard(channel_id):
    result = get_services().synchronizer.reconcile(channel_id)
    return jsonify({'ok': True, 'action': result.status, 'message_id': result.message_id})


@admin.route('/leaderboard/<string:channel_id>', methods=['GET'])
@require_admin_key
def get_leaderboard(channel_id):
    services = get_services()
    default_size = services.synchronizer.size
    limit = request.args.get('limit', default_size, type=int)
    limit = max(1, min(limit, 100))
    rows = services.ledger.top_n(channel_id, limit)
    return jsonify({
        'channel_id': channel_id,
        'entries': [dict(r.to_dict(), rank=i + 1) for i, r in enumerate(rows)],
        'embed': render_leaderboard(rows),
    })
