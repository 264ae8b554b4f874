from reflexboard import create_app, get_services, socketio
from reflexboard.services.tokens import start_sweeper

app = create_app()
# Only the long-running server sweeps expired play tokens
start_sweeper(app, get_services(app).tokens, float(app.config['TOKEN_SWEEP_INTERVAL_SEC']))

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, debug=True)
