from sqlalchemy import Column, DateTime, Integer, LargeBinary, String, UniqueConstraint

from roster_api.db.session import Base, utcnow


class StoredObject(Base):
    __tablename__ = "stored_objects"
    __table_args__ = (UniqueConstraint("tenant_id", "bucket", "path"),)

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    bucket = Column(String(100), nullable=False)
    path = Column(String(500), nullable=False)
    content_type = Column(String(100), nullable=True)
    size = Column(Integer, nullable=False)
    content = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime, default=utcnow)
