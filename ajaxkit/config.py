from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "ajaxkit"
    debug: bool = False
    log_json: bool = False

    # AJAX endpoint
    request_path: str = "/ajax"

    # Library config file, with the sections holding library options and callables
    config_file: Optional[str] = None
    lib_section: str = "lib"
    app_section: str = "app"

    # External minifier, e.g. "terser {source} -o {dest}"
    minifier_command: Optional[str] = None
    minifier_timeout: int = 60

    model_config = SettingsConfigDict(
        env_prefix="AJAXKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
