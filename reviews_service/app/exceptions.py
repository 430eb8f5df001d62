from typing import Any, Optional


class ReviewServiceError(Exception):
    """Ошибка, которая уже знает свой HTTP-статус и тело ответа."""

    def __init__(self, status_code: int, content: dict):
        super().__init__(content.get("message"))
        self.status_code = status_code
        self.content = content


class AuthorizationError(ReviewServiceError):
    def __init__(self):
        super().__init__(403, {"message": "Unauthorized"})


class UpstreamError(Exception):
    """Сбой при обращении к upstream API.

    status_code, message и errors заполняются только если upstream вернул ответ;
    reason всегда содержит исходный текст ошибки.
    """

    def __init__(
        self,
        reason: str,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        errors: Any = None,
        body: Any = None,
        has_response: bool = False,
    ):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
        self.message = message
        self.errors = errors
        self.body = body
        self.has_response = has_response

    def to_service_error(self, default_status: int, fallback_message: str) -> ReviewServiceError:
        content = {"message": self.message or fallback_message}
        error = self.errors if self.has_response else self.reason
        if error is not None:
            content["error"] = error
        return ReviewServiceError(self.status_code or default_status, content)
