from flask_login import login_required, current_user
from . import bp
from .forms import RegisterForm, LoginForm
from ...services import users as user_service
from ...services.users import PROFILE_FIELDS
from ...utils.http import api_response, formdata, validate


@bp.post("/register")
def register():
    form = validate(RegisterForm(formdata=formdata()))
    profile = {k: form.data[k] for k in PROFILE_FIELDS if k != "first_name" and form.data.get(k)}
    user = user_service.register_user(form.email.data, form.password.data, form.first_name.data, **profile)
    return api_response({"user": user.to_dict(), "token": user_service.issue_token(user)},
                        "User registered successfully", 201)


@bp.post("/login")
def login():
    form = validate(LoginForm(formdata=formdata()))
    user = user_service.authenticate(form.email.data, form.password.data)
    return api_response({"user": user.to_dict(), "token": user_service.issue_token(user)}, "Login successful")


@bp.get("/me")
@login_required
def me():
    return api_response(current_user.to_dict(), "Current user retrieved successfully")
