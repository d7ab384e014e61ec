"""Ошибки сервиса и их HTTP-коды.

Каждая ошибка несёт одно человекочитаемое сообщение; обработчик в
``paper_review.main`` превращает её в ответ ``{"detail": message}``.
"""
from fastapi import status


class ServiceError(Exception):
    """Базовая ошибка сервиса"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class InvalidToken(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid token."


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied."


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class AlreadyExists(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists."


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class UpstreamFailure(ServiceError):
    """База данных или хранилище файлов недоступны"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Upstream service failure."
