"""
Python client for the SIS API.

The login state lives in an explicit :class:`ApiSession` that callers create
and hand to :class:`SISClient`. ``init`` stores the token after a successful
login; ``teardown`` clears it on logout or as soon as the server answers
401/403, after which every call raises :class:`SessionExpired` until the
teacher logs in again.
"""
import logging

import requests

from sis.reports import generate_report, attendance_stats

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpired(ApiError):
    def __init__(self, status_code=401, message="Session expired. Please login again."):
        super().__init__(status_code, message)


class ApiSession:
    def __init__(self):
        self.token = None
        self.user = None

    @property
    def active(self):
        return self.token is not None

    def init(self, token, user):
        self.token = token
        self.user = user

    def teardown(self):
        self.token = None
        self.user = None

    def auth_headers(self):
        if not self.active:
            raise SessionExpired(401, "No token found. Please login again.")
        return {"Authorization": f"Bearer {self.token}"}


class SISClient:
    def __init__(self, base_url, session, http=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, auth=True, **kwargs):
        headers = self.session.auth_headers() if auth else {}
        response = self.http.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code in (401, 403) and auth:
            logger.info("Session rejected with %s; tearing down", response.status_code)
            self.session.teardown()
            raise SessionExpired(response.status_code)
        if response.status_code >= 400 or not payload.get("success", False):
            raise ApiError(response.status_code, payload.get("message", "Request failed"))
        return payload

    # auth

    def signup(self, name, email, password):
        payload = self._request("POST", "/api/auth/signup", auth=False,
                                json={"name": name, "email": email, "password": password})
        return payload["data"]

    def login(self, email, password):
        payload = self._request("POST", "/api/auth/login", auth=False,
                                json={"email": email, "password": password})
        data = dict(payload["data"])
        token = data.pop("token")
        self.session.init(token, data)
        return data

    def logout(self):
        try:
            if self.session.active:
                self._request("POST", "/api/auth/logout")
        finally:
            self.session.teardown()

    def forgot_password(self, email):
        return self._request("POST", "/api/auth/forgot-password", auth=False, json={"email": email})["message"]

    def reset_password(self, otp, new_password=None):
        body = {"token": otp}
        if new_password is not None:
            body["newPassword"] = new_password
        return self._request("POST", "/api/auth/reset-password", auth=False, json=body)["message"]

    # roster

    def fetch_students(self):
        return self._request("GET", "/api/students")["data"]

    def add_student(self, username, email, password, grade=None):
        body = {"username": username, "email": email, "password": password}
        if grade:
            body["grade"] = grade
        return self._request("POST", "/api/students", json=body)["data"]

    def delete_student(self, student_id):
        self._request("DELETE", f"/api/students/{student_id}")

    def mark_attendance(self, student_id, status):
        payload = self._request("POST", f"/api/students/{student_id}/attendance", json={"status": status})
        return payload["message"], payload["data"]

    def attendance_history(self, student_id, days=30):
        return self._request("GET", f"/api/students/{student_id}/attendance/history", params={"days": days})["data"]

    # dashboard

    def attendance_stats(self, students=None):
        return attendance_stats(self.fetch_students() if students is None else students)

    def generate_report(self, period="daily", students=None, now=None):
        """Build a report from the roster; fetches it first unless one is given."""
        roster = self.fetch_students() if students is None else students
        return generate_report(roster, period, now=now)
