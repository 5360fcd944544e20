"""
Authentication blueprint
Handles registration, login, logout, the current user and passwords
"""
import logging

from flask import Blueprint, current_app, jsonify, request, session
from flask_login import current_user, login_required, login_user, logout_user

from varmepumpe.extensions import limiter
from varmepumpe.schemas import (
    ChangePasswordInput,
    LoginInput,
    NewPasswordInput,
    PasswordResetRequestInput,
    RegistrationInput,
    SetPasswordInput,
)
from varmepumpe.services import accounts
from varmepumpe.utils.permissions import admin_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

RESET_REQUESTED = 'If the email exists, a reset link has been sent'


def _auth_rate_limit():
    return current_app.config['AUTH_RATE_LIMIT']


@auth_bp.route('/register', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def register():
    """
    Register a new customer or installer

    POST /api/register
    Body: {
        "username": "varmeteknikk",
        "email": "post@varmeteknikk.no",
        "password": "secret1",
        "first_name": "Kari",
        "last_name": "Nordmann",
        "role": "installer",
        "company_name": "Varmeteknikk AS",
        "org_number": "912345678",
        "phone": "91234567"
    }
    """
    data = RegistrationInput.from_json(request.get_json(silent=True))
    user = accounts.register(data)

    return jsonify({
        'message': 'User registered successfully',
        'user': user.summary()
    }), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def login():
    """
    Login user

    POST /api/login
    Body: {
        "username": "admin",
        "password": "secret1"
    }
    """
    data = LoginInput.from_json(request.get_json(silent=True))
    user = accounts.authenticate(data.username, data.password)

    session.permanent = True
    login_user(user)
    logger.info('User %s logged in', user.id)

    return jsonify({
        'message': 'Login successful',
        'user': user.summary()
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """
    Logout current user

    POST /api/logout
    """
    logger.info('User %s logged out', current_user.id)
    logout_user()
    session.clear()
    return jsonify({'message': 'Logout successful'}), 200


@auth_bp.route('/user', methods=['GET'])
@login_required
def get_current_user():
    """
    Current session's user

    GET /api/user
    """
    data = current_user.summary()
    data['first_name'] = current_user.first_name
    data['last_name'] = current_user.last_name
    if current_user.is_installer() and current_user.installer is not None:
        data['installer'] = current_user.installer.to_dict()
    return jsonify({'user': data}), 200


@auth_bp.route('/reset-password', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def request_password_reset():
    """
    Start a password reset. The answer is the same whether or not the
    email is registered.

    POST /api/reset-password
    Body: {"email": "user@example.com"}
    """
    data = PasswordResetRequestInput.from_json(request.get_json(silent=True))
    accounts.request_password_reset(data.email)
    return jsonify({'message': RESET_REQUESTED}), 200


@auth_bp.route('/new-password', methods=['POST'])
@limiter.limit(_auth_rate_limit)
def new_password():
    """
    Complete a password reset

    POST /api/new-password
    Body: {"token": "...", "password": "newsecret"}
    """
    data = NewPasswordInput.from_json(request.get_json(silent=True))
    accounts.reset_password(data.token, data.password)
    return jsonify({'message': 'Password has been reset'}), 200


@auth_bp.route('/user/password', methods=['PUT'])
@login_required
def change_password():
    """
    PUT /api/user/password
    Body: {"current_password": "...", "new_password": "..."}
    """
    data = ChangePasswordInput.from_json(request.get_json(silent=True))
    accounts.change_password(current_user, data.current_password, data.new_password)
    return jsonify({'message': 'Password updated successfully'}), 200


@auth_bp.route('/users/<int:user_id>/password', methods=['PUT'])
@admin_required
def set_user_password(user_id):
    """
    Admin sets another user's password

    PUT /api/users/<user_id>/password
    Body: {"password": "..."}
    """
    data = SetPasswordInput.from_json(request.get_json(silent=True))
    accounts.set_password(user_id, data.password)
    return jsonify({'message': 'Password updated successfully'}), 200
