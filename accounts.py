# Sign-up, login and profile resolvers
from flask import current_app
from sqlalchemy.exc import IntegrityError

from errors import BeerBuddyError, ErrorKind, not_found, validation_error
from forms import (BIO_MAX_LENGTH, NICKNAME_MAX_LENGTH, check_length, clean_optional,
                   normalize_email, validate_email, validate_id, validate_password)
from models import User
from payloads import UserCounts
from security import generate_token, hash_password, verify_password

INVALID_CREDENTIALS = "Invalid email or password"

PROFILE_FIELDS = ('nickname', 'bio', 'profile_picture')


class AccountResolvers:

    def __init__(self, store):
        self.store = store

    def _auth_payload(self, user):
        return {
            "token": generate_token(user.id),
            "user": UserCounts(self.store)(user),
        }

    def signup(self, email, password, name=None, nickname=None):
        if not validate_email(email):
            raise validation_error("Invalid email format")

        password_error = validate_password(password)
        if password_error:
            raise validation_error(password_error)

        nickname = check_length(clean_optional(nickname), NICKNAME_MAX_LENGTH, "Nickname")
        email = normalize_email(email)

        # Same message as a failed login so sign-up cannot probe for accounts
        if self.store.user_by_email(email):
            raise validation_error(INVALID_CREDENTIALS)

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=clean_optional(name),
            nickname=nickname,
        )
        try:
            self.store.save(user)
        except IntegrityError:
            raise validation_error(INVALID_CREDENTIALS)

        current_app.logger.info("User %s signed up", user.id)
        return self._auth_payload(user)

    def login(self, email, password):
        if not validate_email(email):
            raise validation_error("Invalid email format")

        user = self.store.user_by_email(normalize_email(email))
        if not user or not isinstance(password, str) or not verify_password(user.password_hash, password):
            raise BeerBuddyError(ErrorKind.UNAUTHENTICATED, INVALID_CREDENTIALS)

        current_app.logger.info("User %s logged in", user.id)
        return self._auth_payload(user)

    def me(self, viewer):
        user = self.store.get(User, viewer.require())
        if not user:
            raise not_found("User not found")
        return UserCounts(self.store)(user)

    def user(self, user_id):
        user = self.store.get(User, validate_id(user_id, "User id"))
        if not user:
            raise not_found("User not found")
        return UserCounts(self.store)(user)

    def update_profile(self, viewer, changes):
        """Apply only the profile fields present in ``changes``.

        Present fields are trimmed and stored as None when empty.
        """
        user_id = viewer.require()

        updates = {}
        for field in PROFILE_FIELDS:
            if field in changes:
                updates[field] = clean_optional(changes[field])
        check_length(updates.get('nickname'), NICKNAME_MAX_LENGTH, "Nickname")
        check_length(updates.get('bio'), BIO_MAX_LENGTH, "Bio")

        user = self.store.get(User, user_id)
        if not user:
            raise not_found("User not found")

        for field, value in updates.items():
            setattr(user, field, value)
        self.store.commit()

        current_app.logger.info("User %s updated %s", user_id, ", ".join(sorted(updates)) or "nothing")
        return UserCounts(self.store)(user)
