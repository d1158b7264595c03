"""
Helpers para respuestas API consistentes.

Toda respuesta de negocio lleva ``detail`` y ``code``; los errores agregan
``errors`` con la lista de mensajes.
"""

from __future__ import annotations

from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response


def build_success_payload(detail: str, code: str = "SUCCESS", **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"detail": detail, "code": code}
    payload.update(extra)
    return payload


def build_error_payload(
    detail: str,
    code: str = "ERROR",
    errors: list[str] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"detail": detail, "code": code, "errors": errors or [detail]}
    payload.update(extra)
    return payload


def validation_messages(exc: Exception) -> list[str]:
    """Aplana los mensajes de una ValidationError de Django"""
    if not isinstance(exc, DjangoValidationError):
        return [str(exc)]

    if hasattr(exc, "message_dict"):
        messages: list[str] = []
        for field, field_messages in exc.message_dict.items():
            messages.extend(f"{field}: {message}" for message in field_messages)
        return messages
    return [str(message) for message in exc.messages]


def validation_error_response(
    exc: Exception,
    default_detail: str = "Error de validacion",
    default_code: str = "VALIDATION_ERROR",
    http_status: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    errors = [message for message in validation_messages(exc) if message]
    detail = errors[0] if errors else default_detail
    return error_response(
        detail=detail,
        code=default_code,
        http_status=http_status,
        errors=errors or [default_detail],
    )


def success_response(
    detail: str,
    code: str = "SUCCESS",
    http_status: int = status.HTTP_200_OK,
    **extra: Any,
) -> Response:
    return Response(build_success_payload(detail=detail, code=code, **extra), status=http_status)


def error_response(
    detail: str,
    code: str = "ERROR",
    http_status: int = status.HTTP_400_BAD_REQUEST,
    errors: list[str] | None = None,
    **extra: Any,
) -> Response:
    return Response(
        build_error_payload(detail=detail, code=code, errors=errors, **extra),
        status=http_status,
    )
