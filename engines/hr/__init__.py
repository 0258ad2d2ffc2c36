"""
Wegesa HR Engine
"""

from engines.hr.models import Employee, Gender
from engines.hr.services import HRService

__all__ = ["Employee", "Gender", "HRService"]
