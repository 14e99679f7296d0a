"""Pre-employment requirements collected from hired applicants, one record per user."""
from ..extensions import db
from ..errors import NotFoundError, ValidationError
from ..models.pre_employment import PreEmploymentRequirement

EDITABLE_FIELDS = PreEmploymentRequirement.DOCUMENT_FIELDS + PreEmploymentRequirement.NUMBER_FIELDS + ("tesda_certs",)


def get_requirements(user_id):
    return PreEmploymentRequirement.query.filter_by(user_id=user_id).first()


def upsert_requirements(user_id, data):
    fields = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
    certs = fields.get("tesda_certs")
    if certs is not None and not (isinstance(certs, list) and all(isinstance(c, str) for c in certs)):
        raise ValidationError("tesda_certs must be a list of URLs")
    record = get_requirements(user_id)
    if record is None:
        record = PreEmploymentRequirement(user_id=user_id)
        db.session.add(record)
    for key, value in fields.items():
        setattr(record, key, value)
    db.session.commit()
    return record


def delete_requirements(user_id):
    record = get_requirements(user_id)
    if record is None:
        raise NotFoundError("Pre-employment requirements not found")
    db.session.delete(record)
    db.session.commit()
