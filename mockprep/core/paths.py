from __future__ import annotations

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def resolve_project_path(path_value: str) -> Path:
    """Absolute or cwd-relative paths win; anything else is looked up under the project root."""
    p = Path(path_value)
    if p.is_absolute() or p.exists():
        return p.resolve()
    return (PROJECT_ROOT / path_value).resolve()


def env_files(environment: str) -> list[str]:
    """Env files in load order; later files override earlier ones."""
    environment = (environment or "").strip().lower()
    overlay = f".env.{environment}" if environment and environment != "development" else ".env.local"
    return [str(resolve_project_path(".env")), str(resolve_project_path(overlay))]
