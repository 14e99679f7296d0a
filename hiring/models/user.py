from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin, SerializerMixin
from werkzeug.security import generate_password_hash, check_password_hash


class Role:
    APPLICANT = "APPLICANT"
    HR = "HR"
    ADMIN = "ADMIN"
    ALL = (APPLICANT, HR, ADMIN)
    STAFF = (HR, ADMIN)


class User(db.Model, UserMixin, TimestampMixin, SerializerMixin):
    __tablename__ = "users"
    __serialize_exclude__ = ("password_hash",)
    # bearer tokens carry the id; never hand it to a new user
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.APPLICANT, index=True)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120))
    phone = db.Column(db.String(40))

    # profile
    address = db.Column(db.String(255))
    date_of_birth = db.Column(db.Date)
    gender = db.Column(db.String(20))
    civil_status = db.Column(db.String(20))
    nationality = db.Column(db.String(80))

    applications = db.relationship("Application", back_populates="applicant",
                                   cascade="all, delete-orphan")
    pre_employment = db.relationship("PreEmploymentRequirement", uselist=False,
                                     cascade="all, delete-orphan")

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name or ''}".strip()

    @property
    def is_staff(self):
        return self.role in Role.STAFF

    def summary(self):
        return {"id": self.id, "first_name": self.first_name, "last_name": self.last_name,
                "email": self.email, "phone": self.phone}

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
