from ..extensions import db
from .base import TimestampMixin, SerializerMixin


class PreEmploymentRequirement(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "pre_employment_requirements"

    # single-file documents, stored as descriptor URLs
    DOCUMENT_FIELDS = ("photo_2x2", "coe", "marriage_contract", "prc_license", "civil_service",
                       "masters_units", "car", "tor", "other_cert")
    NUMBER_FIELDS = ("sss_number", "philhealth_number", "pagibig_number", "tin_number")

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    photo_2x2 = db.Column(db.String(512))
    coe = db.Column(db.String(512))
    marriage_contract = db.Column(db.String(512))
    prc_license = db.Column(db.String(512))
    civil_service = db.Column(db.String(512))
    masters_units = db.Column(db.String(512))
    car = db.Column(db.String(512))
    tor = db.Column(db.String(512))
    other_cert = db.Column(db.String(512))
    tesda_certs = db.Column(db.JSON)  # list of URLs

    sss_number = db.Column(db.String(40))
    philhealth_number = db.Column(db.String(40))
    pagibig_number = db.Column(db.String(40))
    tin_number = db.Column(db.String(40))

    def __repr__(self) -> str:
        return f"<PreEmploymentRequirement user_id={self.user_id}>"
