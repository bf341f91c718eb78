from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def allowed_origins_from(value):
    """'*' stays a wildcard; anything else is a comma separated origin list."""
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = allowed_origins_from(flask_app.config.get('CLIENT_URL', '*'))
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per process, shared by every handler of this app
    from xox.registry import SessionRegistry
    registry = SessionRegistry(
        min_board_size=int(flask_app.config.get('MIN_BOARD_SIZE', 3)),
        max_board_size=int(flask_app.config.get('MAX_BOARD_SIZE', 10)),
    )
    flask_app.extensions['xox_registry'] = registry

    from xox.main import main
    flask_app.register_blueprint(main)

    from xox.socketio_events import register_socketio_handlers
    register_socketio_handlers(flask_app, registry)

    flask_app.logger.info(f"[startup] cors={allowed_origins} board_sizes={registry.min_board_size}-{registry.max_board_size}")
    return flask_app
