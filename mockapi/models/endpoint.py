# === mockapi/models/endpoint.py ===
import uuid
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Text, DateTime, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from mockapi.db.database import Base

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

class Endpoint(Base):
    __tablename__ = "endpoints"
    __table_args__ = (
        UniqueConstraint("project_id", "method", "path", name="uq_endpoints_project_method_path"),
        CheckConstraint(
            "method IN (" + ", ".join(f"'{m}'" for m in HTTP_METHODS) + ")",
            name="ck_endpoints_method",
        ),
        CheckConstraint("status_code BETWEEN 100 AND 599", name="ck_endpoints_status_code"),
    )

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    method = Column(String(8), nullable=False)
    path = Column(String, nullable=False)
    response_body = Column(Text, nullable=True)
    status_code = Column(Integer, nullable=False, default=200)
    requires_key = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="endpoints")
    keys = relationship(
        "AccessKey",
        back_populates="endpoint",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
