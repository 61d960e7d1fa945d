from typing import Optional

from fastapi import Request

from apps.backend.services.errors import ValidationError
from apps.backend.services.factory import build_source
from apps.backend.services.source import EmissionsSource


def get_source(request: Request) -> EmissionsSource:
    # create_app(source=...) 주입이 없으면 설정대로 한 번만 생성
    source = request.app.state.source
    if source is None:
        source = build_source()
        request.app.state.source = source
    return source


def int_param(raw: Optional[str], name: str, default: Optional[int]) -> Optional[int]:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid {name}: {raw!r} is not an integer") from e
