"""Configuration from environment variables (.env)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    endpoint_url: str
    use_real_backend: bool  # False -> canned fixture response
    timeout_ms: int
    fixture_delay_ms: int
    detailed_errors: bool  # show per-kind wording instead of the two-message collapse

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        logs_dir = os.getenv("PERSONFINDER_LOGS_DIR", "")
        return cls(
            project_root=project_root,
            logs_dir=Path(logs_dir) if logs_dir else project_root / "logs",
            endpoint_url=os.getenv("PERSONFINDER_ENDPOINT_URL", "").strip(),
            use_real_backend=_env_bool("PERSONFINDER_USE_REAL_BACKEND", True),
            timeout_ms=int(os.getenv("PERSONFINDER_TIMEOUT_MS", "60000")),
            fixture_delay_ms=int(os.getenv("PERSONFINDER_FIXTURE_DELAY_MS", "1000")),
            detailed_errors=_env_bool("PERSONFINDER_DETAILED_ERRORS", False),
        )

    @property
    def uses_real_backend(self) -> bool:
        return self.use_real_backend and bool(self.endpoint_url)

    def validate(self) -> list[str]:
        errors = []
        if self.use_real_backend and not self.endpoint_url:
            errors.append(
                "PERSONFINDER_USE_REAL_BACKEND is on but PERSONFINDER_ENDPOINT_URL is empty; "
                "falling back to fixture data"
            )
        elif self.endpoint_url and not self.endpoint_url.startswith(("http://", "https://")):
            errors.append(f"Endpoint URL is not absolute: {self.endpoint_url}")
        if self.timeout_ms <= 0:
            errors.append(f"Timeout must be positive, got {self.timeout_ms} ms")
        if self.fixture_delay_ms < 0:
            errors.append(f"Fixture delay must not be negative, got {self.fixture_delay_ms} ms")
        return errors


config = Config.load()
