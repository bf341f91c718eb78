from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the XOX game server!'})


@main.route('/api/sessions')
def list_sessions():
    registry = current_app.extensions['xox_registry']
    with registry.lock:
        return jsonify({'sessions': registry.summaries()})
