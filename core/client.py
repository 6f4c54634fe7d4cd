"""
Typed HTTP client for the hospital dashboard API.

One method per endpoint.  Methods never raise for HTTP or transport
failures; they return an :class:`ApiResult` whose ``ok`` flag tells the
caller whether ``data`` or ``error`` is meaningful::

    client = HospitalClient("http://127.0.0.1:8000")
    result = client.list_staff(department="Surgery")
    if result.ok:
        for member in result.data:
            ...
    else:
        print(result.status, result.error)

A transport failure (connection refused, timeout) is reported with
``status == 0``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


@dataclass
class ApiResult:
    ok: bool
    status: int
    data: Any = None
    error: str = ""


def _param(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _clean(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {k: _param(v) for k, v in (params or {}).items() if v is not None}


class HospitalClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None,
                 json: Optional[Dict[str, Any]] = None) -> ApiResult:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, params=_clean(params), json=_clean(json) if json else None,
                                        timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ApiResult(ok=False, status=0, error=str(e))

        content_type = resp.headers.get("Content-Type", "")
        if "application/json" in content_type:
            try:
                body = resp.json()
            except ValueError:
                body = resp.text
        else:
            body = resp.text

        if resp.ok:
            return ApiResult(ok=True, status=resp.status_code, data=body)
        if isinstance(body, dict) and body.get("error"):
            error = str(body["error"])
        else:
            error = resp.reason or f"HTTP {resp.status_code}"
        return ApiResult(ok=False, status=resp.status_code, data=body, error=error)

    # Patients ---------------------------------------------------------------

    def list_patients(self, search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/patients", params={"search": search})

    def create_patient(self, **fields: Any) -> ApiResult:
        """Fields: firstName, lastName, dateOfBirth, gender, email, phone, address."""
        return self._request("POST", "/api/patients", json=fields)

    def list_appointments(self, search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/appointments", params={"search": search})

    def create_appointment(self, patient_id: int, date_time: datetime, type: str = "", notes: str = "") -> ApiResult:
        return self._request("POST", "/api/appointments", json={
            "patientId": patient_id, "dateTime": date_time, "type": type, "notes": notes,
        })

    def list_admissions(self, search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/admissions", params={"search": search})

    def create_admission(self, patient_id: int, room_number: str, notes: str = "") -> ApiResult:
        return self._request("POST", "/api/admissions", json={
            "patientId": patient_id, "roomNumber": room_number, "notes": notes,
        })

    def discharge(self, admission_id: int) -> ApiResult:
        return self._request("PUT", f"/api/admissions/{admission_id}/discharge")

    # Billing ----------------------------------------------------------------

    def list_bills(self, search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/bills", params={"search": search})

    def create_bill(self, patient_id: int, amount: Any, due_date: date | datetime, notes: str = "") -> ApiResult:
        return self._request("POST", "/api/bills", json={
            "patientId": patient_id, "amount": str(amount), "dueDate": due_date, "notes": notes,
        })

    def get_bill(self, bill_id: int) -> ApiResult:
        return self._request("GET", f"/api/bills/{bill_id}")

    def update_bill_status(self, bill_id: int, status: str) -> ApiResult:
        return self._request("PATCH", f"/api/bills/{bill_id}", json={"status": status})

    def record_payment(self, bill_id: int, amount: Any, payment_method: str = "",
                       status: Optional[str] = None, payment_date: Optional[datetime] = None) -> ApiResult:
        return self._request("POST", f"/api/bills/{bill_id}/payments", json={
            "amount": str(amount), "paymentMethod": payment_method, "status": status, "paymentDate": payment_date,
        })

    def list_claims(self, search: Optional[str] = None, status: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/insurance", params={"search": search, "status": status})

    def create_claim(self, patient_id: int, insurance_provider: str, claim_number: str, amount: Any,
                     notes: str = "") -> ApiResult:
        return self._request("POST", "/api/insurance", json={
            "patientId": patient_id, "insuranceProvider": insurance_provider,
            "claimNumber": claim_number, "amount": str(amount), "notes": notes,
        })

    def revenue(self, timeframe: str = "month") -> ApiResult:
        return self._request("GET", "/api/revenue", params={"timeframe": timeframe})

    def revenue_range(self, start_date: date, end_date: date) -> ApiResult:
        return self._request("GET", "/api/revenue/range", params={"startDate": start_date, "endDate": end_date})

    # Staff ------------------------------------------------------------------

    def list_staff(self, department: Optional[str] = None, search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/staff", params={"department": department, "search": search})

    def create_staff(self, **fields: Any) -> ApiResult:
        """Fields: firstName, lastName, email, department, role, status, joinDate."""
        return self._request("POST", "/api/staff", json=fields)

    def seed_staff(self) -> ApiResult:
        return self._request("POST", "/api/staff/seed")

    def list_departments(self) -> ApiResult:
        return self._request("GET", "/api/departments")

    def create_department(self, name: str, description: str = "") -> ApiResult:
        return self._request("POST", "/api/departments", json={"name": name, "description": description})

    def list_attendance(self, day: Optional[date] = None, department: Optional[str] = None,
                        search: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/staff/attendance",
                             params={"date": day, "department": department, "search": search})

    def mark_attendance(self, staff_id: int, day: date, status: str, check_in: Optional[datetime] = None,
                        check_out: Optional[datetime] = None, leave_type: str = "",
                        leave_reason: str = "") -> ApiResult:
        return self._request("POST", "/api/staff/attendance", json={
            "staffId": staff_id, "date": day, "status": status, "checkIn": check_in,
            "checkOut": check_out, "leaveType": leave_type, "leaveReason": leave_reason,
        })

    def attendance_stats(self, day: Optional[date] = None, department: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/staff/attendance/stats", params={"date": day, "department": department})

    def attendance_report(self, day: Optional[date] = None, department: Optional[str] = None) -> ApiResult:
        """``data`` is the CSV text."""
        return self._request("GET", "/api/staff/attendance/report", params={"date": day, "department": department})

    def list_shifts(self, day: Optional[date] = None, department: Optional[str] = None) -> ApiResult:
        return self._request("GET", "/api/staff/shifts", params={"date": day, "department": department})

    def create_shift(self, staff_id: int, day: date, start_time: datetime, end_time: datetime) -> ApiResult:
        return self._request("POST", "/api/staff/shifts", json={
            "staffId": staff_id, "date": day, "startTime": start_time, "endTime": end_time,
        })

    def roster(self, day: Optional[date] = None) -> ApiResult:
        return self._request("GET", "/api/staff/initial-data", params={"date": day})

    def health(self) -> ApiResult:
        return self._request("GET", "/healthz")
