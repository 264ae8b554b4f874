from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def get_services(flask_app=None):
    """Services built by ``create_app`` for the given (or current) app."""
    return (flask_app or current_app).extensions['reflexboard']


def create_app(config_class=Config, channel_directory=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from reflexboard.main import main
    flask_app.register_blueprint(main)

    from reflexboard.api.leaderboard import admin
    flask_app.register_blueprint(admin, url_prefix='/api')

    from reflexboard.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    # Services are owned by this app instance; nothing below is process-global
    from reflexboard.channels import build_channel_directory
    from reflexboard.services import Services
    from reflexboard.services.ledger import ScoreLedger
    from reflexboard.services.leaderboard import LeaderboardSynchronizer
    from reflexboard.services.submissions import SubmissionGateway
    from reflexboard.services.tokens import TokenCache

    cfg = flask_app.config
    tokens = TokenCache(ttl_sec=int(cfg['TOKEN_TTL_SEC']), length=int(cfg['TOKEN_LENGTH']))
    ledger = ScoreLedger()
    synchronizer = LeaderboardSynchronizer(
        ledger,
        channel_directory or build_channel_directory(cfg),
        size=int(cfg['LEADERBOARD_SIZE']),
    )
    gateway = SubmissionGateway(tokens, ledger, synchronizer, required_run_length=int(cfg['REQUIRED_RUN_LENGTH']))
    flask_app.extensions['reflexboard'] = Services(
        tokens=tokens, ledger=ledger, synchronizer=synchronizer, gateway=gateway,
    )

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import reflexboard.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('issue-token')
    @click.argument('channel_id')
    @click.argument('user_id')
    @click.argument('username')
    def issue_token_command(channel_id, user_id, username):
        """Issues a play link for USERNAME in CHANNEL_ID."""
        from reflexboard.services.tokens import HolderContext, build_play_link, link_message
        token = tokens.create(HolderContext(channel_id=channel_id, user_id=user_id, username=username))
        link = build_play_link(cfg['PUBLIC_URL'], token)
        click.echo(link_message(link, tokens.ttl_sec))

    @click.command('refresh-leaderboard')
    @click.argument('channel_id')
    def refresh_leaderboard_command(channel_id):
        """Posts or updates the leaderboard message for CHANNEL_ID."""
        with flask_app.app_context():
            result = synchronizer.reconcile(channel_id)
        click.echo(f'Leaderboard {result.status} for channel {channel_id}.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(issue_token_command)
    flask_app.cli.add_command(refresh_leaderboard_command)

    return flask_app
