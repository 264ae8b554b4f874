import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'data.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Base URL of the static client; play links are built on top of it
    PUBLIC_URL = os.environ.get('PUBLIC_URL', 'http://localhost:5000')
    CORS_ORIGINS = _csv(os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'))
    # Play link tokens (seconds)
    TOKEN_TTL_SEC = int(os.environ.get('TOKEN_TTL_SEC', '900'))
    TOKEN_SWEEP_INTERVAL_SEC = int(os.environ.get('TOKEN_SWEEP_INTERVAL_SEC', '60'))
    TOKEN_LENGTH = int(os.environ.get('TOKEN_LENGTH', '24'))
    # A run only counts when the client reports exactly this many trials
    REQUIRED_RUN_LENGTH = int(os.environ.get('REQUIRED_RUN_LENGTH', '50'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '20'))
    # Chat platform. Empty token disables leaderboard messages.
    DISCORD_TOKEN = os.environ.get('DISCORD_TOKEN', '')
    DISCORD_API_BASE = os.environ.get('DISCORD_API_BASE', 'https://discord.com/api/v10')
    CHANNEL_TIMEOUT_SEC = float(os.environ.get('CHANNEL_TIMEOUT_SEC', '5'))
    # Shared secret for the token issuing / refresh endpoints. Empty disables them.
    ADMIN_API_KEY = os.environ.get('ADMIN_API_KEY', '')
