import pytest

from errors import BeerBuddyError, ErrorKind
from models import User
from security import Viewer, verify_token


def test_signup_returns_token_and_user_without_password(accounts):
    result = accounts.signup('a@x.com', 'password1', name='  Ann ', nickname='annie')

    user = result['user']
    assert verify_token(result['token']) == {'user_id': user['id']}
    assert user['email'] == 'a@x.com'
    assert user['name'] == 'Ann'
    assert user['nickname'] == 'annie'
    assert 'password_hash' not in user
    assert 'password' not in user
    assert user['follower_count'] == 0
    assert user['total_beers_count'] == 0


def test_signup_normalizes_email(accounts):
    result = accounts.signup('  Mixed@Case.COM ', 'password1')
    assert result['user']['email'] == 'mixed@case.com'


def test_duplicate_signup_is_generic(accounts):
    accounts.signup('a@x.com', 'password1')
    with pytest.raises(BeerBuddyError) as exc:
        accounts.signup(' A@X.com ', 'different-password')
    assert exc.value.message == 'Invalid email or password'
    assert User.query.count() == 1


@pytest.mark.parametrize('email, password, message', [
    ('not-an-email', 'password1', 'Invalid email format'),
    ('a@x.com', '', 'Password is required'),
    ('a@x.com', 'short', 'Password must be at least 8 characters long'),
])
def test_signup_validation(accounts, email, password, message):
    with pytest.raises(BeerBuddyError) as exc:
        accounts.signup(email, password)
    assert exc.value.kind is ErrorKind.VALIDATION
    assert exc.value.message == message


def test_signup_rejects_long_nickname(accounts):
    with pytest.raises(BeerBuddyError) as exc:
        accounts.signup('a@x.com', 'password1', nickname='n' * 51)
    assert exc.value.message == 'Nickname must be 50 characters or less'


def test_login_round_trip(accounts):
    user_id = accounts.signup('a@x.com', 'password1')['user']['id']

    result = accounts.login('A@x.com ', 'password1')

    assert result['user']['id'] == user_id
    assert verify_token(result['token']) == {'user_id': user_id}


def test_login_failures_are_indistinguishable(accounts):
    accounts.signup('a@x.com', 'password1')

    with pytest.raises(BeerBuddyError) as wrong_password:
        accounts.login('a@x.com', 'password2')
    with pytest.raises(BeerBuddyError) as unknown_user:
        accounts.login('nobody@x.com', 'password1')

    assert wrong_password.value.kind is unknown_user.value.kind is ErrorKind.UNAUTHENTICATED
    assert wrong_password.value.message == unknown_user.value.message == 'Invalid email or password'


def test_me_requires_viewer(accounts):
    with pytest.raises(BeerBuddyError) as exc:
        accounts.me(Viewer())
    assert exc.value.kind is ErrorKind.UNAUTHENTICATED


def test_me_includes_aggregates(accounts, make_user, make_post):
    viewer, _ = make_user()
    make_post(viewer, beers_count=3)
    make_post(viewer, beers_count=4)

    me = accounts.me(viewer)

    assert me['id'] == viewer.user_id
    assert me['total_posts_count'] == 2
    assert me['total_beers_count'] == 7
    assert me['follower_count'] == 0
    assert me['following_count'] == 0


def test_me_for_deleted_user_is_not_found(accounts):
    with pytest.raises(BeerBuddyError) as exc:
        accounts.me(Viewer(999))
    assert exc.value.kind is ErrorKind.NOT_FOUND


def test_user_lookup(accounts, make_user):
    viewer, _ = make_user(name='Bob')
    assert accounts.user(viewer.user_id)['name'] == 'Bob'

    with pytest.raises(BeerBuddyError) as exc:
        accounts.user(12345)
    assert exc.value.message == 'User not found'


def test_update_profile_only_touches_given_fields(accounts, make_user):
    viewer, _ = make_user(nickname='old')
    accounts.update_profile(viewer, {'bio': 'Hello', 'profile_picture': 'http://pic'})

    updated = accounts.update_profile(viewer, {'bio': '  Cheers  '})

    assert updated['nickname'] == 'old'
    assert updated['bio'] == 'Cheers'
    assert updated['profile_picture'] == 'http://pic'


def test_update_profile_ignores_other_keys(accounts, make_user):
    viewer, created = make_user()

    updated = accounts.update_profile(viewer, {
        'email': 'other@example.com',
        'password_hash': 'not-a-hash',
        'name': 'Mallory',
        'bio': 'Hi',
    })

    assert updated['bio'] == 'Hi'
    assert updated['email'] == created['user']['email']
    assert updated['name'] == created['user']['name']
    assert accounts.login(created['user']['email'], 'password1')['user']['id'] == viewer.user_id


def test_update_profile_blank_clears_field(accounts, make_user):
    viewer, _ = make_user(nickname='old')
    assert accounts.update_profile(viewer, {'nickname': '   '})['nickname'] is None


@pytest.mark.parametrize('changes, message', [
    ({'nickname': 'n' * 51}, 'Nickname must be 50 characters or less'),
    ({'bio': 'b' * 501}, 'Bio must be 500 characters or less'),
])
def test_update_profile_length_bounds(accounts, make_user, changes, message):
    viewer, _ = make_user(nickname='keep')
    with pytest.raises(BeerBuddyError) as exc:
        accounts.update_profile(viewer, changes)
    assert exc.value.message == message
    assert accounts.me(viewer)['nickname'] == 'keep'


def test_update_profile_requires_viewer(accounts):
    with pytest.raises(BeerBuddyError) as exc:
        accounts.update_profile(Viewer(), {'bio': 'x'})
    assert exc.value.kind is ErrorKind.UNAUTHENTICATED
