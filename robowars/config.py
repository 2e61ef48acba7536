from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Messaging
    mailbox_capacity: int = 6

    # Interpreter limits
    max_steps_per_turn: int = 10_000
    max_expansion_depth: int = 64
    max_stack_depth: int = 1024

    # Seed for the `random` word (None = nondeterministic)
    random_seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="ROBOWARS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
