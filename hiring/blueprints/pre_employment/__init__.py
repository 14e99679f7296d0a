from flask import Blueprint

bp = Blueprint("pre_employment", __name__)

from . import routes  # noqa: E402,F401
