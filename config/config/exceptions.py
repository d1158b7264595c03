"""
Manejador global de excepciones DRF con formato consistente.

Toda respuesta de error sale como {"detail", "code", "errors"}.
"""

from __future__ import annotations

from rest_framework.views import exception_handler


def _flatten(data, prefix: str = "") -> list[str]:
    if isinstance(data, dict):
        messages: list[str] = []
        for field, value in data.items():
            label = field if field == "non_field_errors" else f"{prefix}{field}"
            messages.extend(_flatten(value, f"{label}: "))
        return messages
    if isinstance(data, list):
        messages = []
        for item in data:
            messages.extend(_flatten(item, prefix))
        return messages
    return [f"{prefix}{data}"]


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return response

    data = response.data
    code = str(getattr(exc, "default_code", "error")).upper()

    if isinstance(data, dict) and "detail" in data:
        errors = _flatten(data["detail"])
    else:
        errors = _flatten(data)
        if isinstance(data, (dict, list)):
            code = "VALIDATION_ERROR"

    detail = errors[0] if errors else "Ha ocurrido un error."
    response.data = {
        "detail": detail,
        "code": code,
        "errors": errors or [detail],
    }
    return response
