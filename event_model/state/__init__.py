from .active_pool import ActivePool
from .employee import Employee, EmployeeEvent, EventData

__all__ = ["ActivePool", "Employee", "EmployeeEvent", "EventData"]
