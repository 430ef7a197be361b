"""Conversões de valores de célula compartilhadas pelos schemas."""
from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_datetime(value: datetime | None) -> str:
    """Formata um datetime como ISO 8601 em UTC ("" para None)."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_datetime(value: Any) -> datetime | None:
    """Lê um timestamp ISO 8601; células vazias resultam em None."""
    if value is None or value == "":
        return None
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_bool(value: Any) -> bool:
    # UNFORMATTED_VALUE devolve bool; valores digitados à mão chegam como texto
    if isinstance(value, bool):
        return value
    return str(value).strip().upper() in ("TRUE", "1", "YES", "SIM")


def parse_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(value)


def split_list(value: Any) -> list[str]:
    """Divide uma célula separada por vírgulas em uma lista."""
    if value is None or value == "":
        return []
    return [item.strip() for item in str(value).split(",") if item.strip()]


def join_list(values: list[str] | None) -> str:
    return ",".join(values) if values else ""


def optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
