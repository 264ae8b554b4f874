from flask_socketio import join_room, leave_room, emit
from reflexboard import socketio


def _room(channel_id) -> str:
    return f"channel:{channel_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_channel(data):
    channel_id = (data or {}).get('channel_id')
    if not channel_id:
        emit('error', {'message': 'channel_id is required'})
        return
    room = _room(channel_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_channel(data):
    channel_id = (data or {}).get('channel_id')
    if not channel_id:
        emit('error', {'message': 'channel_id is required'})
        return
    room = _room(channel_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'.

    Clients join ``channel:<id>`` rooms to receive ``leaderboard_update``
    events emitted by the leaderboard synchronizer.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_channel', handle_join_channel, namespace='/ws')
    socketio.on_event('leave_channel', handle_leave_channel, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
