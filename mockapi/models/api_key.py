# === mockapi/models/api_key.py ===
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from mockapi.db.database import Base

class AccessKey(Base):
    __tablename__ = "api_keys"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    endpoint_id = Column(String(36), ForeignKey("endpoints.id", ondelete="CASCADE"), nullable=False, index=True)
    key_value = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    endpoint = relationship("Endpoint", back_populates="keys")
