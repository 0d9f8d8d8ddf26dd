"""
Project: Cafe POS
Date: October 2026

Description:
Credential checks shared by the REST login route and the Socket.IO
`loginUser` event, so both transports answer with the same messages.
"""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from models import User

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
MISSING_CREDENTIALS = "Username and password are required"
ACCOUNT_DISABLED = "This account has been disabled, please contact an administrator"


class AuthError(Exception):
    def __init__(self, message, status=401):
        super().__init__(message)
        self.message = message
        self.status = status


def hash_password(password):
    return generate_password_hash(password)


def authenticate(username, password):
    """
    Returns the active `User` matching the credentials.

    Raises:
        AuthError: with status 400 for missing fields, 401 otherwise.
    """
    username = (username or "").strip()
    if not username or not password:
        raise AuthError(MISSING_CREDENTIALS, status=400)

    user = User.query.filter_by(username=username).first()
    if not user or not check_password_hash(user.password_hash, password):
        log.info("Failed login for %r", username)
        raise AuthError(INVALID_CREDENTIALS)
    if user.active is False:
        log.info("Login attempt on disabled account %r", username)
        raise AuthError(ACCOUNT_DISABLED)

    log.info("User %r logged in", username)
    return user
