from sqlalchemy import Column, DateTime, String

from roster_api.db.session import Base, utcnow


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=utcnow)
