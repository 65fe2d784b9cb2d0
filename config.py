from pydantic_settings import SettingsConfigDict, BaseSettings


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_prefix='AVL_', extra='ignore')

    APP_NAME: str = "avl-decoder"
    PROD: bool = False

    # Rotating file log, only written in production
    LOG_FILE: str = "./logs/avl_decoder.log"
    LOG_MAX_BYTES: int = 1024 * 1024 * 5  # 5 MB
    LOG_BACKUP_COUNT: int = 10

    # Raise instead of warning when the declared IO total disagrees with the tiers
    STRICT_IO_COUNT: bool = False


settings = Settings()
