"""Signed bearer tokens for the JSON API."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app

logger = logging.getLogger(__name__)


def generate_token(user_id: int) -> str:
    """Issue a token identifying ``user_id`` for ``JWT_EXPIRATION_HOURS``."""
    now = datetime.now(timezone.utc)
    payload = {
        'user_id': user_id,
        'iat': now,
        'exp': now + timedelta(hours=current_app.config['JWT_EXPIRATION_HOURS']),
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_token(token: str) -> int | None:
    """Return the user id carried by ``token``, or None if it is not valid."""
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
        )
    except jwt.ExpiredSignatureError:
        logger.info('Rejected expired token')
        return None
    except jwt.InvalidTokenError as e:
        logger.info(f'Rejected invalid token: {e}')
        return None

    user_id = payload.get('user_id')
    if not isinstance(user_id, int):
        return None
    return user_id


def bearer_token(auth_header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    token = auth_header[len('Bearer '):].strip()
    return token or None
