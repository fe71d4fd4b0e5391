"""Library configuration derived from the environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings with defaults, overridable via RANDSOURCE_* variables."""

    model_config = ConfigDict(env_prefix="RANDSOURCE_")

    debug: bool = False
    log_level: str = "WARNING"

    # Serialized history
    json_indent: int = 2

    # Demo script seed (0 is still a deterministic seed at construction)
    demo_seed: int = 0


settings = Settings()
