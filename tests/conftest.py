import pytest

from app import create_app
from models import db
from security import Viewer


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'beerbuddy.db'}",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def accounts(app, ctx):
    return app.extensions['beerbuddy']['accounts']


@pytest.fixture
def posts(app, ctx):
    return app.extensions['beerbuddy']['posts']


@pytest.fixture
def follows(app, ctx):
    return app.extensions['beerbuddy']['follows']


@pytest.fixture
def make_user(accounts):
    """Sign up a user and return (viewer, payload)."""
    counter = {'n': 0}

    def _make_user(email=None, password='password1', **kwargs):
        counter['n'] += 1
        email = email or f"user{counter['n']}@example.com"
        result = accounts.signup(email, password, **kwargs)
        return Viewer(result['user']['id']), result
    return _make_user


@pytest.fixture
def make_post(posts):
    def _make_post(viewer, title='Night out', beers_count=3, image_url='http://img', **kwargs):
        return posts.create_post(viewer, title, beers_count, image_url, **kwargs)
    return _make_post


@pytest.fixture
def auth_header():
    def _auth_header(token):
        return {"Authorization": f"Bearer {token}"}
    return _auth_header
