"""Build configuration contract."""

import time
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

CSP_MODES = ("auto", "hash", "nonce")


def _default_version() -> str:
    return str(int(time.time() * 1000))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_env: str = Field(alias="SSR_APP_ENV", default="dev")
    log_level: str = Field(alias="SSR_LOG_LEVEL", default="INFO")

    out_dir: str = Field(alias="SSR_OUT_DIR", default=".ssr")
    runtime_dir: str = Field(alias="SSR_RUNTIME_DIR", default="node_modules/@ssr/kit/src/runtime")
    routes_dir: str = Field(alias="SSR_ROUTES_DIR", default="src/routes")
    hooks_server: str = Field(alias="SSR_HOOKS_SERVER", default="src/hooks.server")
    app_template: str = Field(alias="SSR_APP_TEMPLATE", default="src/app.html")
    error_template: str = Field(alias="SSR_ERROR_TEMPLATE", default="src/error.html")
    service_worker: str = Field(alias="SSR_SERVICE_WORKER", default="src/service-worker")

    paths_base: str = Field(alias="SSR_PATHS_BASE", default="")
    paths_assets: str = Field(alias="SSR_PATHS_ASSETS", default="")
    version_name: str = Field(alias="SSR_VERSION_NAME", default_factory=_default_version)
    public_prefix: str = Field(alias="SSR_PUBLIC_PREFIX", default="PUBLIC_")

    # Stylesheets strictly smaller than this many bytes are inlined; 0 disables inlining.
    inline_style_threshold: int = Field(alias="SSR_INLINE_STYLE_THRESHOLD", default=0)

    csp_mode: str = Field(alias="SSR_CSP_MODE", default="auto")
    csp_directives: dict[str, list[str]] = Field(alias="SSR_CSP_DIRECTIVES", default_factory=dict)
    csp_report_only: dict[str, list[str]] = Field(
        alias="SSR_CSP_REPORT_ONLY", default_factory=dict
    )
    csrf_check_origin: bool = Field(alias="SSR_CSRF_CHECK_ORIGIN", default=True)
    embedded: bool = Field(alias="SSR_EMBEDDED", default=False)
    service_worker_register: bool = Field(alias="SSR_SERVICE_WORKER_REGISTER", default=True)

    def paths(self) -> dict[str, str]:
        return {"base": self.paths_base, "assets": self.paths_assets}

    def csp(self) -> dict[str, object]:
        return {
            "mode": self.csp_mode,
            "directives": self.csp_directives,
            "reportOnly": self.csp_report_only,
        }


def validate_settings(settings: Settings) -> None:
    problems: list[str] = []

    if settings.inline_style_threshold < 0:
        problems.append("SSR_INLINE_STYLE_THRESHOLD(must be >= 0)")
    if settings.csp_mode not in CSP_MODES:
        problems.append(f"SSR_CSP_MODE(one of {', '.join(CSP_MODES)})")
    paths = {"SSR_PATHS_BASE": settings.paths_base, "SSR_PATHS_ASSETS": settings.paths_assets}
    for key, value in paths.items():
        if value and (not value.startswith(("/", "http://", "https://")) or value.endswith("/")):
            problems.append(f"{key}(root-relative or absolute, no trailing slash)")
    if not settings.version_name:
        problems.append("SSR_VERSION_NAME")

    if problems:
        raise ConfigError(f"invalid build configuration: {', '.join(problems)}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise ConfigError(f"invalid build configuration: {fields}") from exc
