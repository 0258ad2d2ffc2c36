"""
Wegesa HR Engine — Application Service
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from core.store import CrudService
from core.time import parse_date
from engines.hr.models import Employee, Gender

_DATE_FIELDS = ("date_of_birth", "contract_start_date", "contract_end_date")


class HRService(CrudService[Employee]):
    record_type = Employee
    entity_name = "Employee"
    id_field = "employee_id"
    logger_name = "wegesa.hr"

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "gender" in patch:
            patch["gender"] = Gender(patch["gender"])
        for field_name in _DATE_FIELDS:
            if field_name in patch:
                patch[field_name] = parse_date(patch[field_name], field_name)
        return patch

    def add_employee(
        self,
        *,
        full_name: str,
        date_of_birth,
        gender,
        position: str,
        mobile_contact: str,
        contract_start_date,
        contract_end_date,
        is_active: bool = True,
        photo_url: Optional[str] = None,
    ) -> Employee:
        fields = self._coerce_patch({
            "gender": gender,
            "date_of_birth": date_of_birth,
            "contract_start_date": contract_start_date,
            "contract_end_date": contract_end_date,
        })
        return self._create(lambda new_id, now: Employee(
            employee_id=new_id,
            full_name=full_name,
            position=position,
            mobile_contact=mobile_contact,
            created_at=now,
            updated_at=now,
            is_active=is_active,
            photo_url=photo_url or None,
            **fields,
        ))

    def list_employees(
        self,
        *,
        search: Optional[str] = None,
        gender=None,
        active: Optional[bool] = None,
    ) -> List[Employee]:
        """Filter by name/position/contact search, gender, and active flag."""
        needle = (search or "").strip().lower()
        gender_filter = Gender(gender) if gender is not None else None

        def _matches(e: Employee) -> bool:
            if gender_filter is not None and e.gender is not gender_filter:
                return False
            if active is not None and e.is_active is not active:
                return False
            if needle:
                return any(
                    needle in text.lower()
                    for text in (e.full_name, e.position, e.mobile_contact)
                )
            return True

        return self.list(_matches)

    def expiring_contracts(self, *, within_days: int, today: date) -> List[Employee]:
        return self.list(
            lambda e: e.is_active and e.contract_expires_within(within_days, today)
        )
