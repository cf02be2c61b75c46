from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from motdyn.config import SYSTEM_CONFIG_PATH, USER_CONFIG_PATH
from motdyn.hook import PROFILE_DIR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MOTDYN_", extra="ignore")

    log_level: str = Field(default="WARNING")  # DEBUG|INFO|WARNING|ERROR
    system_config: str = Field(default=SYSTEM_CONFIG_PATH)
    user_config: str = Field(default=USER_CONFIG_PATH)
    profile_dir: str = Field(default=PROFILE_DIR)
