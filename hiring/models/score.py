from ..extensions import db
from .base import TimestampMixin, SerializerMixin


class Score(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "scores"
    __table_args__ = (
        db.UniqueConstraint("application_id", "rubric_id", name="uq_scores_application_rubric"),
    )

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    rubric_id = db.Column(db.Integer, db.ForeignKey("rubrics.id"), nullable=False)
    score_value = db.Column(db.Float, nullable=False)
    comments = db.Column(db.Text)

    application = db.relationship("Application", back_populates="scores")
    rubric = db.relationship("Rubric", back_populates="scores")

    def to_dict(self):
        data = super().to_dict()
        if self.rubric is not None:
            data["rubric"] = {"id": self.rubric.id, "criteria": self.rubric.criteria,
                              "max_score": self.rubric.max_score, "weight": self.rubric.weight}
        return data
