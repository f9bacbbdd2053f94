from sqlalchemy import Column, DateTime, Integer, String

from roster_api.db.session import Base, utcnow


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)

    employee_code = Column(String(50), nullable=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    position = Column(String(200), nullable=True)
    department = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active|on_leave|terminated

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
