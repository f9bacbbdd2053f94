from .models import CollectionProfile

EMPLOYEES = CollectionProfile(
    name="employees",
    search_fields=("first_name", "last_name", "email", "employee_code"),
    status_field="status",
    facet_fields=("department",),
    default_sort="-created_at",
)

PAYROLL_EMPLOYEES = CollectionProfile(
    name="payroll_employees",
    search_fields=("first_name", "last_name", "employee_code"),
    status_field="status",
    facet_fields=("pay_group_id",),
)

AUDIT_EVENTS = CollectionProfile(
    name="audit_events",
    search_fields=("user_name", "template_name", "user_email"),
    status_field="action",
    facet_fields=("department", "user_id"),
    default_sort="-occurred_at",
)
