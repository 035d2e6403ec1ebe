"""Settings endpoints: API key, model, system prompt and theme."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from chatsense.api.deps import get_settings_store
from chatsense.api.models import (
    ModelOption,
    ModelsResponse,
    SettingsResponse,
    SettingsUpdate,
    ThemeSetting,
)
from chatsense.llm.catalog import describe_model
from chatsense.llm.client import MissingApiKeyError
from chatsense.storage.models import Settings
from chatsense.storage.settings_store import SettingsStore

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _to_response(store: SettingsStore, settings: Settings) -> SettingsResponse:
    return SettingsResponse(
        api_key=settings.masked_api_key(),
        has_api_key=settings.has_api_key,
        model_name=settings.model_name,
        system_prompt=settings.system_prompt,
        default_system_prompt=store.get_system_prompt(use_default=True),
    )


@router.get("", response_model=SettingsResponse)
async def get_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsResponse:
    return _to_response(store, store.load())


@router.put("", response_model=SettingsResponse)
async def update_settings(
    update: SettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    current = store.load()
    changes = update.model_dump(exclude_none=True)
    saved = store.save(current.model_copy(update=changes))
    return _to_response(store, saved)


@router.delete("", response_model=SettingsResponse)
async def reset_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsResponse:
    """Restore the default model and system prompt (keeps the API key)."""
    return _to_response(store, store.reset_to_defaults())


@router.get("/models", response_model=ModelsResponse)
async def list_models(store: SettingsStore = Depends(get_settings_store)) -> ModelsResponse:
    try:
        model_ids = await run_in_threadpool(store.available_models)
    except MissingApiKeyError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    options = []
    for model_id in model_ids:
        info = describe_model(model_id)
        options.append(
            ModelOption(
                id=model_id,
                description=info.description if info else "",
                recommended=info.recommended if info else False,
            )
        )
    return ModelsResponse(models=options, current=store.get_model_name())


@router.get("/theme", response_model=ThemeSetting)
async def get_theme(store: SettingsStore = Depends(get_settings_store)) -> ThemeSetting:
    return ThemeSetting(mode=store.get_theme_mode())


@router.put("/theme", response_model=ThemeSetting)
async def set_theme(
    theme: ThemeSetting,
    store: SettingsStore = Depends(get_settings_store),
) -> ThemeSetting:
    store.set_theme_mode(theme.mode)
    return ThemeSetting(mode=store.get_theme_mode())
