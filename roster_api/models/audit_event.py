from sqlalchemy import JSON, Column, DateTime, Integer, String

from roster_api.db.session import Base, utcnow


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)

    user_id = Column(String(64), nullable=False)
    user_name = Column(String(200), nullable=False)
    user_email = Column(String(255), nullable=False)
    action = Column(String(50), nullable=False)
    template_name = Column(String(200), nullable=False, default="")
    department = Column(String(100), nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    details = Column(JSON, nullable=False, default=dict)

    occurred_at = Column(DateTime, default=utcnow, index=True)
    created_at = Column(DateTime, default=utcnow)
