# Password hashing and bearer tokens
# Argon2id with 64 MB of memory, 3 iterations and a parallelism of 4.
# Verification helpers never raise: bad input yields False or None.
from argon2 import PasswordHasher, Type
from argon2.exceptions import Argon2Error, InvalidHashError
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from errors import not_authenticated

password_hasher = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    type=Type.ID,
)


def hash_password(password):
    return password_hasher.hash(password)


def verify_password(password_hash, password):
    if not isinstance(password_hash, str) or not isinstance(password, str):
        return False
    try:
        return password_hasher.verify(password_hash, password)
    except (Argon2Error, InvalidHashError, TypeError, ValueError):
        return False


def generate_token(user_id):
    return create_access_token(identity=str(user_id))


def verify_token(token):
    if not token or not isinstance(token, str):
        return None
    try:
        decoded = decode_token(token)
        return {"user_id": int(decoded["sub"])}
    except (PyJWTError, JWTExtendedException, KeyError, TypeError, ValueError):
        return None


def extract_token_from_header(auth_header):
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        return None
    return parts[1]


class Viewer:
    """The identity, if any, behind the current request."""

    def __init__(self, user_id=None):
        self.user_id = user_id

    @property
    def is_authenticated(self):
        return self.user_id is not None

    def require(self):
        if self.user_id is None:
            raise not_authenticated()
        return self.user_id

    def __repr__(self):
        return f"Viewer(user_id={self.user_id!r})"


ANONYMOUS = Viewer()


def viewer_from_header(auth_header):
    payload = verify_token(extract_token_from_header(auth_header))
    if payload is None:
        return ANONYMOUS
    return Viewer(payload["user_id"])
