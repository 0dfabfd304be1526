import logging

from flask import Blueprint, request
from flask_login import login_required, current_user

from cp_analytics.errors import ApiError
from cp_analytics.extensions import db
from cp_analytics.models import User
from cp_analytics.responses import success_response
from cp_analytics.services.token_service import generate_token
from cp_analytics.validators import validate_register, validate_login

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    data = validate_register(request.get_json(silent=True))

    if User.find_by_email(data['email']):
        raise ApiError('Email already registered', code='EMAIL_EXISTS', status_code=409)

    user = User(email=data['email'])
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()
    logger.info(f'Registered user {user.id}')

    return success_response(
        {'user': user.to_dict(), 'token': generate_token(user.id)},
        'User registered successfully',
        201,
    )


@auth_bp.route('/login', methods=['POST'])
def login():
    data = validate_login(request.get_json(silent=True))

    user = User.find_by_email(data['email'])
    if not user or not user.check_password(data['password']):
        raise ApiError(
            'Invalid email or password', code='INVALID_CREDENTIALS', status_code=401
        )

    return success_response(
        {'user': user.to_dict(), 'token': generate_token(user.id)},
        'Login successful',
    )


@auth_bp.route('/me')
@login_required
def me():
    return success_response({'user': current_user.to_dict()}, 'Current user')
