# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import yaml
import os
import logging

from ssa_exporter.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Ensure .env from the project directory is loaded for local CLI runs
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

DEFAULT_SSACLI_PATH = "ssacli"
DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_LISTEN_PORT = 9101
DEFAULT_INTERVAL_TIME = 5.0  # the collector is cheap, ssacli itself is the slow part

class FileConfig(BaseModel):
    model_config = ConfigDict(extra='ignore')

    # ssacli settings
    ssacli_path: Optional[str] = DEFAULT_SSACLI_PATH
    command_timeout: Optional[float] = None

    # Exposition settings
    listen_address: Optional[str] = DEFAULT_LISTEN_ADDRESS
    listen_port: Optional[int] = DEFAULT_LISTEN_PORT

    # Collection settings
    interval_time: Optional[float] = DEFAULT_INTERVAL_TIME
    max_iterations: Optional[int] = 0
    prune_stale: Optional[bool] = False



class EnvConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra='ignore',  # Ignore extra fields in .env that aren't defined in the model
    )

    # ssacli settings
    SSACLI_PATH: str = Field(default=DEFAULT_SSACLI_PATH)
    COMMAND_TIMEOUT: Optional[float] = Field(default=None)

    # Exposition settings
    LISTEN_ADDRESS: str = Field(default=DEFAULT_LISTEN_ADDRESS)
    LISTEN_PORT: int = Field(default=DEFAULT_LISTEN_PORT)

    # Collection settings
    INTERVAL_TIME: float = Field(default=DEFAULT_INTERVAL_TIME)
    MAX_ITERATIONS: int = Field(default=0)
    PRUNE_STALE: bool = Field(default=False)



class Settings:
    def __init__(self, config_file: Optional[str] = None, from_env: bool = False):
        self.from_env = from_env

        if from_env:
            logger.debug("Loading configuration from environment variables")
            try:
                self._env_config = EnvConfig()
            except ValidationError as e:
                raise ConfigurationError(f"Invalid environment configuration: {e}") from e

            self.ssacli_path = self._env_config.SSACLI_PATH
            self.command_timeout = self._env_config.COMMAND_TIMEOUT
            self.listen_address = self._env_config.LISTEN_ADDRESS
            self.listen_port = self._env_config.LISTEN_PORT
            self.interval_time = self._env_config.INTERVAL_TIME
            self.max_iterations = self._env_config.MAX_ITERATIONS
            self.prune_stale = self._env_config.PRUNE_STALE

        else:
            # Load from YAML file
            logger.debug(f"Loading configuration from file: {config_file}")
            data = {}
            if config_file and os.path.exists(config_file):
                with open(config_file, 'r') as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise ConfigurationError(f"Config file {config_file} must contain a mapping")
            elif config_file:
                raise ConfigurationError(f"Config file {config_file} does not exist")
            try:
                self._file_config = FileConfig(**{k: v for k, v in data.items() if v is not None})
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration in {config_file}: {e}") from e

            self.ssacli_path = self._file_config.ssacli_path
            self.command_timeout = self._file_config.command_timeout
            self.listen_address = self._file_config.listen_address
            self.listen_port = self._file_config.listen_port
            self.interval_time = self._file_config.interval_time
            self.max_iterations = self._file_config.max_iterations
            self.prune_stale = self._file_config.prune_stale

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        if not self.ssacli_path:
            raise ConfigurationError("ssacli_path must not be empty")
        if self.interval_time is None or self.interval_time <= 0:
            raise ConfigurationError(f"interval_time must be positive, got {self.interval_time}")
        if self.listen_port is None or not 1 <= self.listen_port <= 65535:
            raise ConfigurationError(f"listen_port must be between 1 and 65535, got {self.listen_port}")
        if self.max_iterations is None or self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be a non-negative integer, got {self.max_iterations}")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ConfigurationError(f"command_timeout must be positive, got {self.command_timeout}")
