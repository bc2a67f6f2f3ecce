import os


def get_settings_module() -> str:
    # Selected by APP_ENV, defaults to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def parse_weekdays(value: str) -> frozenset:
    """"0,1,2" -> {0, 1, 2}; Monday is 0."""
    days = frozenset(int(part) for part in value.split(",") if part.strip())
    if not days or any(not 0 <= d <= 6 for d in days):
        raise ValueError(f"REGULAR_WEEKDAYS must list weekdays 0-6, got {value!r}")
    return days
