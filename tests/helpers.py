from datetime import date

from models import AssignmentRecord, FixedDate, ONGOING


def make_record(emp, project, date_from, date_to=None):
    """Build a record from ISO strings; date_to=None means ongoing."""
    return AssignmentRecord(
        employee_id=emp,
        project_id=project,
        date_from=FixedDate(date.fromisoformat(date_from)),
        date_to=FixedDate(date.fromisoformat(date_to)) if date_to else ONGOING,
    )
