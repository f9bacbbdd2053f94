from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String

from roster_api.db.session import Base, utcnow


class PayrollEmployee(Base):
    __tablename__ = "payroll_employees"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)

    employee_code = Column(String(50), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # Resolved against the pay groups table by lookup, not enforced here
    pay_group_id = Column(String(64), nullable=True)
    pay_type = Column(String(20), nullable=False, default="salary")  # hourly|salary
    rate = Column(Numeric(scale=2), nullable=False, default=0)       # hourly or salary per period
    default_hours = Column(Numeric(scale=2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="active")    # active|on_leave|terminated
    tax = Column(String(20), nullable=False, default="standard")     # standard|low|high
    hire_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=utcnow)
