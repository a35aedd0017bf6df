"""
Client state machine for the security-question password reset.

Steps run ``email -> questions -> new_password -> success``. Each submit
validates locally first, then calls the server; any failure leaves the flow
on its current step with ``error`` set to the message to show.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

import httpx

from mindful_heaven.core.logging_config import get_logger

logger = get_logger(__name__)

RESET_PATH = "/api/v1/security-password-reset"

NO_QUESTIONS_MESSAGE = (
    "No security questions set up for this account. Please contact support or use a different recovery method."
)
FETCH_FAILED_MESSAGE = "Failed to fetch security questions. Please check your email and try again."
WRONG_ANSWERS_MESSAGE = "Security answers are incorrect. Please try again."
RESET_FAILED_MESSAGE = "Failed to reset password. Please try again."


class ResetStep(str, Enum):
    EMAIL = "email"
    QUESTIONS = "questions"
    NEW_PASSWORD = "new_password"
    SUCCESS = "success"


class SecurityResetFlow:
    """Drives one password reset.

    Args:
        http: Client whose ``base_url`` points at the server
        min_password_length: Shortest password accepted before calling the server
    """

    def __init__(self, http: httpx.AsyncClient, min_password_length: int = 6) -> None:
        self.http = http
        self.min_password_length = min_password_length
        self.reset()

    def reset(self) -> None:
        """Forget everything and go back to the email step."""
        self.step = ResetStep.EMAIL
        self.email = ""
        self.questions: Optional[Tuple[str, str]] = None
        self.answer1 = ""
        self.answer2 = ""
        self.new_password = ""
        self.confirm_password = ""
        self.error = ""
        self.loading = False

    def back_to_questions(self) -> None:
        if self.step == ResetStep.NEW_PASSWORD:
            self.step = ResetStep.QUESTIONS
            self.error = ""

    async def _call(self, body: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        self.loading = True
        try:
            response = await self.http.post(RESET_PATH, json=body)
        finally:
            self.loading = False
        try:
            data = response.json()
        except ValueError:
            data = {}
        return response.status_code, data if isinstance(data, dict) else {}

    async def submit_email(self, email: str) -> bool:
        """Look up the account's questions; moves to ``questions`` on success."""
        self.email = email.strip().lower()
        if not self.email:
            self.error = "Please enter your email"
            return False
        self.error = ""

        try:
            status, data = await self._call({"action": "get-questions", "email": self.email})
        except httpx.HTTPError as e:
            logger.warning(f"Fetching security questions failed: {e}")
            self.error = FETCH_FAILED_MESSAGE
            return False

        if data.get("error") == "no_questions":
            self.error = NO_QUESTIONS_MESSAGE
            return False
        if status != 200 or "question1" not in data:
            self.error = data.get("error") or FETCH_FAILED_MESSAGE
            return False

        self.questions = (data["question1"], data["question2"])
        self.step = ResetStep.QUESTIONS
        return True

    async def submit_answers(self, answer1: str, answer2: str) -> bool:
        """Check the answers; moves to ``new_password`` when they match."""
        self.answer1, self.answer2 = answer1.strip(), answer2.strip()
        if not self.answer1 or not self.answer2:
            self.error = "Please answer both security questions"
            return False
        self.error = ""

        try:
            status, data = await self._call(
                {"action": "verify-answers", "email": self.email, "answer1": self.answer1, "answer2": self.answer2}
            )
        except httpx.HTTPError as e:
            logger.warning(f"Verifying security answers failed: {e}")
            self.error = WRONG_ANSWERS_MESSAGE
            return False

        if status != 200 or not data.get("verified"):
            self.error = data.get("error") or WRONG_ANSWERS_MESSAGE
            return False

        self.step = ResetStep.NEW_PASSWORD
        return True

    async def submit_new_password(self, new_password: str, confirm_password: str) -> bool:
        """Send answers and the new password; moves to ``success`` when stored."""
        self.new_password, self.confirm_password = new_password, confirm_password
        if not self.answer1 or not self.answer2:
            self.error = "Please answer both security questions"
            return False
        if len(new_password) < self.min_password_length:
            self.error = f"Password must be at least {self.min_password_length} characters"
            return False
        if new_password != confirm_password:
            self.error = "Passwords do not match"
            return False
        self.error = ""

        try:
            status, data = await self._call(
                {
                    "action": "verify-and-reset",
                    "email": self.email,
                    "answer1": self.answer1,
                    "answer2": self.answer2,
                    "newPassword": new_password,
                }
            )
        except httpx.HTTPError as e:
            logger.warning(f"Password reset request failed: {e}")
            self.error = RESET_FAILED_MESSAGE
            return False

        if status != 200 or data.get("error"):
            self.error = data.get("error") or RESET_FAILED_MESSAGE
            return False

        self.step = ResetStep.SUCCESS
        return True
