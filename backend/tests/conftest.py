import os
import sys
import pytest

# Ensure the backend root (containing the `reflexboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from reflexboard import create_app, db, get_services, socketio
from reflexboard.errors import ChannelError


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PUBLIC_URL = 'https://play.example.test'
    CORS_ORIGINS = ['http://localhost:5173']
    TOKEN_TTL_SEC = 900
    TOKEN_SWEEP_INTERVAL_SEC = 60
    TOKEN_LENGTH = 24
    REQUIRED_RUN_LENGTH = 50
    LEADERBOARD_SIZE = 20
    DISCORD_TOKEN = ''
    ADMIN_API_KEY = 'test-admin-key'


class FakeChannel:
    """In-memory chat channel. Message ids are sequential strings."""

    def __init__(self, channel_id):
        self.channel_id = channel_id
        self.messages = {}
        self.pinned = set()
        self.sent = 0
        self.edits = 0
        self.fail_send = False
        self.fail_edit = False
        self.fail_pin = False
        self._next_id = 1000

    def fetch_message(self, message_id):
        if message_id not in self.messages:
            raise ChannelError(f'unknown message {message_id}')
        return {'id': message_id, 'embeds': [self.messages[message_id]]}

    def send_message(self, embed):
        if self.fail_send:
            raise ChannelError('missing access')
        self._next_id += 1
        message_id = str(self._next_id)
        self.messages[message_id] = embed
        self.sent += 1
        return message_id

    def edit_message(self, message_id, embed):
        if self.fail_edit or message_id not in self.messages:
            raise ChannelError(f'cannot edit {message_id}')
        self.messages[message_id] = embed
        self.edits += 1

    def pin_message(self, message_id):
        if self.fail_pin:
            raise ChannelError('missing permissions')
        self.pinned.add(message_id)

    def delete(self, message_id):
        self.messages.pop(message_id, None)
        self.pinned.discard(message_id)


class FakeChannelDirectory:
    def __init__(self):
        self.channels = {}
        self.fail_resolve = False

    def add(self, channel_id):
        channel = FakeChannel(channel_id)
        self.channels[channel_id] = channel
        return channel

    def resolve(self, channel_id):
        if self.fail_resolve:
            raise ChannelError('gateway timeout')
        return self.channels.get(channel_id)


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def directory():
    return FakeChannelDirectory()


@pytest.fixture()
def flask_app(directory):
    application = create_app(TestConfig, channel_directory=directory)
    with application.app_context():
        # Ensure models are imported so tables are created
        import reflexboard.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def services(flask_app):
    return get_services(flask_app)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def admin_headers():
    return {'X-Admin-Key': TestConfig.ADMIN_API_KEY}


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def file_backed_app(tmp_path, directory):
    """App on a SQLite file so several threads can hold their own connections."""

    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'scores.db')
        SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'timeout': 30}}

    application = create_app(FileConfig, channel_directory=directory)
    with application.app_context():
        import reflexboard.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()
