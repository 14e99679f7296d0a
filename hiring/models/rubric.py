from ..extensions import db
from .base import TimestampMixin, SerializerMixin


class RubricState:
    ACTIVE = "ACTIVE"
    # kept for existing scores, hidden from new scoring
    ARCHIVED = "ARCHIVED"


class Rubric(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "rubrics"

    id = db.Column(db.Integer, primary_key=True)
    criteria = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    max_score = db.Column(db.Float, nullable=False, default=10)
    weight = db.Column(db.Float, nullable=False, default=1.0)
    state = db.Column(db.String(20), nullable=False, default=RubricState.ACTIVE, index=True)

    scores = db.relationship("Score", back_populates="rubric")

    @property
    def is_active(self):
        return self.state == RubricState.ACTIVE

    def to_dict(self):
        data = super().to_dict()
        data["is_active"] = self.is_active
        return data

    def __repr__(self) -> str:
        return f"<Rubric id={self.id} criteria={self.criteria!r} state={self.state}>"
