"""
Admin Settings API.

Provides endpoints to read the declared face-to-face settings with their
current values, update them with validation, and reset them to defaults.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.api.deps import Viewer, get_config_service, require_configure
from src.components.plugin_settings import (
    PluginConfigService,
    SettingValidationError,
    SettingView,
)

router = APIRouter()


# --- Request/Response Models ---


class SettingResponse(BaseModel):
    """One declared setting."""

    name: str
    kind: str
    visiblename: str
    description: str
    default: str | None
    value: str | None
    hidden: bool
    choices: dict[str, str]


class SettingsResponse(BaseModel):
    """Declared settings and the resulting configuration."""

    settings: list[SettingResponse]
    config: dict[str, str]


class SettingsUpdateRequest(BaseModel):
    """Settings update request; keys are full setting names."""

    values: dict[str, Any]


class ValidationErrorResponse(BaseModel):
    """Validation error response."""

    field: str
    code: str
    message: str


# --- Helper Functions ---


def view_to_response(view: SettingView) -> SettingResponse:
    return SettingResponse(
        name=view.name,
        kind=view.kind,
        visiblename=view.visiblename,
        description=view.description,
        default=view.default,
        value=view.value,
        hidden=view.hidden,
        choices=view.choices,
    )


def build_response(service: PluginConfigService) -> SettingsResponse:
    return SettingsResponse(
        settings=[view_to_response(view) for view in service.describe()],
        config=service.get(),
    )


def validation_errors_to_response(
    errors: list[SettingValidationError],
) -> list[dict[str, str]]:
    """Convert validation errors to plain dicts for the error body."""
    return [
        ValidationErrorResponse(field=e.field, code=e.code, message=e.message).model_dump()
        for e in errors
    ]


# --- Endpoints ---


@router.get(
    "",
    response_model=SettingsResponse,
    summary="Get face-to-face settings",
    description="Declared settings with current values. Defaults fill unset values.",
)
def get_plugin_settings(
    viewer: Viewer = Depends(require_configure),
    service: PluginConfigService = Depends(get_config_service),
) -> SettingsResponse:
    return build_response(service)


@router.put(
    "",
    response_model=SettingsResponse,
    summary="Update face-to-face settings",
    description="Validate and store setting values. Nothing is stored if any value fails.",
    responses={400: {"description": "Validation errors with actionable messages"}},
)
def update_plugin_settings(
    request: SettingsUpdateRequest,
    viewer: Viewer = Depends(require_configure),
    service: PluginConfigService = Depends(get_config_service),
) -> SettingsResponse:
    _, errors = service.update(request.values)

    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Validation failed",
                "errors": validation_errors_to_response(errors),
            },
        )

    return build_response(service)


@router.post(
    "/reset",
    response_model=SettingsResponse,
    summary="Reset face-to-face settings",
)
def reset_plugin_settings(
    viewer: Viewer = Depends(require_configure),
    service: PluginConfigService = Depends(get_config_service),
) -> SettingsResponse:
    service.reset_to_defaults()
    return build_response(service)
