"""Accounts and bearer tokens."""
from datetime import timedelta
import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError
from ..extensions import db
from ..errors import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..models.base import utcnow
from ..models.user import User, Role

PROFILE_FIELDS = ("first_name", "last_name", "phone", "address", "date_of_birth",
                  "gender", "civil_status", "nationality")


def register_user(email, password, first_name, role=Role.APPLICANT, **profile):
    if role not in Role.ALL:
        raise ValidationError(f"Invalid role: {role}")
    email = (email or "").strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError("A user with this email already exists")
    user = User(email=email, first_name=first_name, role=role,
                **{k: v for k, v in profile.items() if k in PROFILE_FIELDS})
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("A user with this email already exists")
    current_app.logger.info('User %s registered as %s', user.id, role)
    return user


def authenticate(email, password):
    user = User.query.filter_by(email=(email or "").strip().lower()).first()
    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid email or password")
    return user


def issue_token(user):
    expires = utcnow() + timedelta(minutes=int(current_app.config.get("JWT_EXPIRES_MINUTES", 1440)))
    return jwt.encode({"id": user.id, "exp": expires}, current_app.config["JWT_SECRET"], algorithm="HS256")


def load_user_from_token(token):
    try:
        decoded = jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=["HS256"])
    except jwt.InvalidTokenError:
        return None
    return db.session.get(User, decoded.get("id"))


def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def list_users(role=None):
    query = User.query
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id.asc()).all()


def delete_user(user_id):
    user = get_user(user_id)
    if user.role == Role.HR:
        raise AuthorizationError("Cannot delete HR users")
    db.session.delete(user)
    db.session.commit()
    current_app.logger.info('User %s deleted', user_id)
