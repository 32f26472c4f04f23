import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Header, HTTPException, status

from src.adapters.clock import SystemClock
from src.adapters.memory import InMemoryConfigRepo, InMemoryFacetofaceRepo, load_seed
from src.adapters.time_display import DisplayTimeAdapter
from src.components.html import HtmlWriter
from src.components.plugin_settings import (
    AdminSettingsPage,
    PluginConfigService,
    build_settings_page,
)
from src.components.strings import StringManager
from src.domain.policy import PolicyEngine, ViewerFlags
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("F2F_RULES_PATH", self.base_dir / "rules.yaml"))
        seed = os.environ.get("F2F_SEED_PATH")
        self.seed_path = Path(seed) if seed else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Repos ---
@lru_cache
def get_facetoface_repo() -> InMemoryFacetofaceRepo:
    settings = get_settings()
    if settings.seed_path is not None:
        return load_seed(settings.seed_path)
    return InMemoryFacetofaceRepo()


@lru_cache
def get_config_repo() -> InMemoryConfigRepo:
    return InMemoryConfigRepo()


# --- Output Services ---
@lru_cache
def get_strings() -> StringManager:
    return StringManager.for_lang(get_rules().plugin.lang)


def get_clock() -> SystemClock:
    return SystemClock()


def get_formatter(rules: Rules = Depends(get_rules)) -> DisplayTimeAdapter:
    return DisplayTimeAdapter.from_rules(rules.display)


def get_writer(rules: Rules = Depends(get_rules)) -> HtmlWriter:
    return HtmlWriter(rules.display.pix_base_url)


def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


# --- Settings Page ---
def get_settings_page(
    repo: InMemoryFacetofaceRepo = Depends(get_facetoface_repo),
    strings: StringManager = Depends(get_strings),
    writer: HtmlWriter = Depends(get_writer),
) -> AdminSettingsPage:
    return build_settings_page(
        strings=strings,
        roles=repo.get_all_roles(),
        profile_fields=repo.get_custom_profile_fields(),
        customfields=repo.get_customfields(),
        sitenotices=repo.get_sitenotices(),
        writer=writer,
    )


def get_config_service(
    page: AdminSettingsPage = Depends(get_settings_page),
    repo: InMemoryConfigRepo = Depends(get_config_repo),
) -> PluginConfigService:
    return PluginConfigService(page, repo)


# --- Viewer ---
@dataclass(frozen=True)
class Viewer:
    role: str
    user_id: int | None
    flags: ViewerFlags


def get_viewer(
    x_viewer_role: str = Header(default="student"),
    x_viewer_id: int | None = Header(default=None),
    policy: PolicyEngine = Depends(get_policy),
) -> Viewer:
    """
    Viewer identity from request headers.

    Authentication is the host's concern; the shell trusts these headers.
    """
    return Viewer(role=x_viewer_role, user_id=x_viewer_id, flags=policy.viewer_flags(x_viewer_role))


def require_configure(
    viewer: Viewer = Depends(get_viewer),
    policy: PolicyEngine = Depends(get_policy),
) -> Viewer:
    if not policy.check_capability(viewer.role, "configure"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to configure face-to-face",
        )
    return viewer
