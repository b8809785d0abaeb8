import pytest

from errors import BeerBuddyError, ErrorKind
from forms import (check_length, clean_optional, normalize_email, validate_beers_count,
                   validate_email, validate_limit, validate_password)


@pytest.mark.parametrize('email', ['a@x.com', '  A@X.COM ', 'first.last@sub.example.org'])
def test_validate_email_accepts(email):
    assert validate_email(email)


@pytest.mark.parametrize('email', [None, '', 'plain', 'a@b', 'a b@x.com', '@x.com', 42])
def test_validate_email_rejects(email):
    assert not validate_email(email)


def test_normalize_email_trims_and_lowercases():
    assert normalize_email('  Someone@Example.COM ') == 'someone@example.com'


def test_validate_password():
    assert validate_password(None) == 'Password is required'
    assert validate_password('short') == 'Password must be at least 8 characters long'
    assert validate_password('password1') is None


def test_clean_optional():
    assert clean_optional(None) is None
    assert clean_optional('   ') is None
    assert clean_optional('  hi  ') == 'hi'


def test_check_length_message():
    with pytest.raises(BeerBuddyError) as exc:
        check_length('x' * 51, 50, 'Nickname')
    assert exc.value.kind is ErrorKind.VALIDATION
    assert exc.value.message == 'Nickname must be 50 characters or less'


@pytest.mark.parametrize('value, message', [
    (0, 'Beer count must be between 1 and 12'),
    (13, 'Beer count must be between 1 and 12'),
    (2.5, 'Beer count must be a whole number'),
    ('3', 'Beer count must be a whole number'),
    (True, 'Beer count must be a whole number'),
    (None, 'Beer count must be a whole number'),
])
def test_validate_beers_count_rejects(value, message):
    with pytest.raises(BeerBuddyError) as exc:
        validate_beers_count(value, 1, 12)
    assert exc.value.message == message


def test_validate_beers_count_bounds_are_inclusive():
    assert validate_beers_count(1, 1, 12) == 1
    assert validate_beers_count(12, 1, 12) == 12


def test_validate_limit():
    assert validate_limit(None, 10, 50) == 10
    assert validate_limit(5, 10, 50) == 5
    for bad in (0, 51, -1):
        with pytest.raises(BeerBuddyError):
            validate_limit(bad, 10, 50)
