# ORM models are defined in the infrastructure layer; Django discovers them here.
from apps.invoicing.infrastructure.persistence.models import (  # noqa: F401
    Invoice,
    TeamMember,
    TimesheetEntry,
    Vendor,
)
