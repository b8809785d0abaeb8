# Routes for handling requests
from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from errors import BeerBuddyError, validation_error
from security import viewer_from_header

# Create blueprints for different route categories
main_bp = Blueprint('main', __name__)
auth_bp = Blueprint('auth', __name__)
users_bp = Blueprint('users', __name__)
posts_bp = Blueprint('posts', __name__)
comments_bp = Blueprint('comments', __name__)


def resolvers(name):
    return current_app.extensions['beerbuddy'][name]


def current_viewer():
    return viewer_from_header(request.headers.get('Authorization'))


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise validation_error("Request body must be a JSON object")
    return data


def int_arg(name):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise validation_error(f"{name} must be a whole number")


def bool_arg(name):
    raw = request.args.get(name, '').strip().lower()
    if raw in ('', '0', 'false', 'no'):
        return False
    if raw in ('1', 'true', 'yes'):
        return True
    raise validation_error(f"{name} must be true or false")


# Error handling

@main_bp.app_errorhandler(BeerBuddyError)
def handle_beerbuddy_error(error):
    return jsonify(error.to_dict()), error.kind.status_code


@main_bp.app_errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({"error": error.description}), error.code


@main_bp.app_errorhandler(Exception)
def handle_unexpected_error(error):
    current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


@main_bp.route('/', methods=['GET'])
def welcome():
    """Health check for the API"""
    return jsonify({"app": "BeerBuddy", "status": "ok"}), 200


# Authentication Endpoints

@auth_bp.route('/signup', methods=['POST'])
def signup():
    """User Registration Endpoint"""
    data = json_body()
    result = resolvers('accounts').signup(
        data.get('email'),
        data.get('password'),
        name=data.get('name'),
        nickname=data.get('nickname'),
    )
    return jsonify(result), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User Login Endpoint"""
    data = json_body()
    return jsonify(resolvers('accounts').login(data.get('email'), data.get('password'))), 200


@auth_bp.route('/me', methods=['GET'])
def me():
    return jsonify(resolvers('accounts').me(current_viewer())), 200


# User Endpoints

@users_bp.route('/me', methods=['PATCH', 'PUT'])
def update_profile():
    """Update current user's profile; only the fields sent are changed"""
    viewer = current_viewer()
    viewer.require()
    data = json_body()
    return jsonify(resolvers('accounts').update_profile(viewer, data)), 200


@users_bp.route('/<int:user_id>', methods=['GET'])
def get_user(user_id):
    return jsonify(resolvers('accounts').user(user_id)), 200


@users_bp.route('/<int:user_id>/follow', methods=['POST'])
def follow_user(user_id):
    success = resolvers('follows').follow_user(current_viewer(), user_id)
    return jsonify({"success": success}), 201


@users_bp.route('/<int:user_id>/follow', methods=['DELETE'])
def unfollow_user(user_id):
    success = resolvers('follows').unfollow_user(current_viewer(), user_id)
    return jsonify({"success": success}), 200


@users_bp.route('/is-following', methods=['GET'])
def is_following():
    viewer = current_viewer()
    result = resolvers('follows').is_following(viewer, int_arg('follower_id'), int_arg('following_id'))
    return jsonify({"is_following": result}), 200


@users_bp.route('/<int:user_id>/follows', methods=['GET'])
def get_follows(user_id):
    return jsonify(resolvers('follows').follows(current_viewer(), user_id)), 200


@users_bp.route('/<int:user_id>/followers', methods=['GET'])
def get_followers(user_id):
    return jsonify(resolvers('follows').followers(current_viewer(), user_id)), 200


@users_bp.route('/<int:user_id>/following', methods=['GET'])
def get_following(user_id):
    return jsonify(resolvers('follows').following(current_viewer(), user_id)), 200


# Post Endpoints

@posts_bp.route('', methods=['GET'])
def list_posts():
    """Keyset-paginated posts; ?feed=true restricts to followed authors"""
    viewer = current_viewer()
    result = resolvers('posts').posts(
        viewer,
        limit=int_arg('limit'),
        cursor=int_arg('cursor'),
        feed=bool_arg('feed'),
    )
    return jsonify(result), 200


@posts_bp.route('', methods=['POST'])
def create_post():
    viewer = current_viewer()
    viewer.require()
    data = json_body()
    post = resolvers('posts').create_post(
        viewer,
        title=data.get('title'),
        beers_count=data.get('beers_count'),
        image_url=data.get('image_url'),
        description=data.get('description'),
    )
    return jsonify(post), 201


@posts_bp.route('/<int:post_id>', methods=['DELETE'])
def delete_post(post_id):
    success = resolvers('posts').delete_post(current_viewer(), post_id)
    return jsonify({"success": success}), 200


@posts_bp.route('/<int:post_id>/like', methods=['POST'])
def toggle_like(post_id):
    return jsonify(resolvers('posts').toggle_like(current_viewer(), post_id)), 200


@posts_bp.route('/<int:post_id>/comments', methods=['GET'])
def get_comments(post_id):
    return jsonify(resolvers('posts').post_comments(post_id)), 200


@posts_bp.route('/<int:post_id>/comments', methods=['POST'])
def add_comment(post_id):
    viewer = current_viewer()
    viewer.require()
    data = json_body()
    comment = resolvers('posts').create_comment(viewer, post_id, data.get('text'))
    return jsonify(comment), 201


@comments_bp.route('/<int:comment_id>', methods=['DELETE'])
def delete_comment(comment_id):
    success = resolvers('posts').delete_comment(current_viewer(), comment_id)
    return jsonify({"success": success}), 200
