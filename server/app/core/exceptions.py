from __future__ import annotations


class WasteCalculatorError(Exception):
    """Base error for the waste calculator service."""


class InvalidInputError(WasteCalculatorError, ValueError):
    """An input record holds a value the cost model cannot work with."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")

    def to_dict(self) -> dict[str, object]:
        value = self.value if isinstance(self.value, (int, float, str)) else repr(self.value)
        if isinstance(value, float) and value != value:
            value = "NaN"
        elif isinstance(value, float) and value in (float("inf"), float("-inf")):
            value = str(value)
        return {"field": self.field, "value": value, "reason": self.reason}


class ClientNotFoundError(WasteCalculatorError, LookupError):
    def __init__(self, client_id: str) -> None:
        self.client_id = client_id
        super().__init__(f"client {client_id} not found")
