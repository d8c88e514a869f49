from .id_generation import (
    ID_PREFIX,
    ID_WIDTH,
    EmployeeIdIssuer,
    format_employee_id,
    get_unique_id,
    reset_unique_id,
)

__all__ = [
    "ID_PREFIX",
    "ID_WIDTH",
    "EmployeeIdIssuer",
    "format_employee_id",
    "get_unique_id",
    "reset_unique_id",
]
