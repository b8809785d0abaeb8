# Main Flask app
import click
from flask import Flask
from flask.cli import with_appcontext
from flask_jwt_extended import JWTManager

from accounts import AccountResolvers
from config import config
from follows import FollowResolvers
from models import db, Post, User
from posts import PostResolvers
from routes import main_bp, auth_bp, users_bp, posts_bp, comments_bp
from security import hash_password
from store import Store

jwt = JWTManager()

SEED_EMAIL = 'test@example.com'


def create_app(config_name='default', test_config=None):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)

    # One store client shared by every resolver
    store = Store(db, max_workers=app.config['AGGREGATE_WORKERS'])
    app.extensions['beerbuddy'] = {
        'accounts': AccountResolvers(store),
        'follows': FollowResolvers(store),
        'posts': PostResolvers(
            store,
            beers_min=app.config['BEERS_COUNT_MIN'],
            beers_max=app.config['BEERS_COUNT_MAX'],
            page_size=app.config['FEED_PAGE_SIZE'],
            max_page_size=app.config['FEED_MAX_PAGE_SIZE'],
        ),
    }

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(posts_bp, url_prefix='/posts')
    app.register_blueprint(comments_bp, url_prefix='/comments')

    app.cli.add_command(seed_command)

    with app.app_context():
        db.create_all()

    return app


@click.command('seed')
@click.option('--posts', 'post_count', default=50, show_default=True, help='Number of posts to create.')
@click.option('--keep', is_flag=True, help='Keep the demo user\'s existing posts.')
@with_appcontext
def seed_command(post_count, keep):
    """Create a demo user with a batch of posts."""
    user = User.query.filter_by(email=SEED_EMAIL).first()
    if not user:
        user = User(
            email=SEED_EMAIL,
            password_hash=hash_password('Test123!@#'),
            name='Test User',
            nickname='BeerLover',
            bio='Love trying new beers!',
        )
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created user: {user.email} (ID: {user.id})")
    else:
        click.echo(f"Using existing user: {user.email} (ID: {user.id})")

    if not keep:
        deleted = 0
        for post in Post.query.filter_by(author_id=user.id).all():
            db.session.delete(post)
            deleted += 1
        db.session.commit()
        click.echo(f"Deleted {deleted} existing posts")

    for i in range(post_count):
        db.session.add(Post(
            title='Great Beer Night',
            description='Had an amazing time at the local pub with friends!',
            beers_count=(i % 10) + 1,
            image_url=f'https://picsum.photos/500/700?random={100 + i}',
            author_id=user.id,
        ))
    db.session.commit()
    click.echo(f"Created {post_count} posts for {user.email}")


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000)
