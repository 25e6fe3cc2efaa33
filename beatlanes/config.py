"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Analysis
    frame_size: int = 2048
    hop_seconds: float = 0.02
    history_size: int = 43  # frames, ~0.86s at the default hop
    bin_stride: int = 8
    time_stride: int = 8
    progress_steps: int = 20  # progress notice every 1/20th of the frames

    # Audio sources
    song_dir: str = "songs"
    fetch_timeout_seconds: float = 60.0
    user_agent: str = "beatlanes/0.1"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_upload_mb: int = 50
    log_level: str = "INFO"

    model_config = {"env_prefix": "BEATLANES_"}


settings = Settings()
