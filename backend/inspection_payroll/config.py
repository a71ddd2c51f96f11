from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.enums import BillingPolicy, BillingRule


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2024-06-01.v1"
    database_url: str = "sqlite:///./inspection.db"

    # create_all at startup; prod runs alembic instead
    auto_create_schema: bool = True

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["http://localhost:5173"]

    # ---- Billing defaults for new properties ----
    default_billing_policy: str = "ThreeMonthToggle"
    default_billing_rule: str = "PolicyFlag"

    # FixedType rule: a routine visit this many months after the last one is billable again
    routine_toggle_reset_months: int = 3

    # ---- Reports ----
    report_window_days: int = 14

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        is_prod = env in ("prod", "production")

        if self.report_window_days < 1:
            raise ValueError("report_window_days must be >= 1")
        if self.routine_toggle_reset_months < 1:
            raise ValueError("routine_toggle_reset_months must be >= 1")

        BillingPolicy(self.default_billing_policy)
        BillingRule(self.default_billing_rule)

        if is_prod:
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
