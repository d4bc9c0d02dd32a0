from datetime import timedelta

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

DEFAULT_PASSWORD = "password"


class Config(BaseSettings):
    """Application configuration loaded from environment variables and config.yaml."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    debug: bool = False
    password: str = DEFAULT_PASSWORD  # Shared password exchanged for a session token
    video_path: str = ""  # Path to the single video file served by this deployment
    video_media_type: str = "video/mp4"
    cors_origins: list[str] = []
    session_token_ttl: timedelta = timedelta(hours=24)
    media_token_ttl: timedelta = timedelta(minutes=30)
    reaper_interval: timedelta = timedelta(hours=1)  # Period of the expired-token sweep
    stream_chunk_size: int = 64 * 1024

    model_config = {
        "env_file": [".env"],
        "env_prefix": "REELGATE_",
        "yaml_file": "config.yaml",
        "extra": "ignore",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over config.yaml so deployments can override single keys
        return (init_settings, env_settings, dotenv_settings, YamlConfigSettingsSource(settings_cls))

    @property
    def uses_default_password(self) -> bool:
        return self.password == DEFAULT_PASSWORD
