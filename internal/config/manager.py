"""
Configuration management for the Google Maps client CLI.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from lib.google_maps import ClientConfiguration, ConfigurationError, GoogleMapsConfigDict

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholders with actual values.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ``${VAR_NAME}`` placeholders in configuration values.

    Strings are substituted, dictionaries and lists are processed recursively,
    any other value is returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Loads the TOML configuration: main file, config directories, .env and ${ENV} placeholders."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        tomlFiles: List[Path] = []
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping, dood!")
            return tomlFiles

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping, dood!")
            return tomlFiles

        try:
            for tomlFile in dirPath.rglob("*.toml"):
                if tomlFile.is_file():
                    tomlFiles.append(tomlFile)
                    logger.debug(f"Found config file: {tomlFile}")
        except OSError as e:
            logger.error(f"Error scanning directory {directory}: {e}")

        return sorted(tomlFiles)

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, later values win, dood!"""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load the main TOML file, then merge every .toml file found in the
        config directories (sorted, recursively) on top of it.

        Raises:
            SystemExit: If there is nothing to load, the main file is broken
                or ``google-maps.api-key`` is missing
        """
        configFile = Path(self.config_path)
        hasConfigFile = configFile.exists()
        if not hasConfigFile and not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        try:
            config: Dict[str, Any] = {}
            if hasConfigFile:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
                logger.info(f"Loaded main config from {self.config_path}")

            if self.config_dirs:
                logger.info(f"Scanning {len(self.config_dirs)} config directories for .toml files, dood!")

                for configDir in self.config_dirs:
                    tomlFiles = self._findTomlFilesRecursive(configDir)
                    logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

                    for tomlFile in tomlFiles:
                        try:
                            with open(tomlFile, "rb") as f:
                                dirConfig = tomli.load(f)
                            config = self._mergeConfigs(config, dirConfig)
                            logger.info(f"Merged config from {tomlFile}")
                        except (OSError, tomli.TOMLDecodeError) as e:
                            # Continue with other files instead of exiting
                            logger.error(f"Failed to load config file {tomlFile}: {e}")

            if not config.get("google-maps", {}).get("api-key"):
                logger.error("Google Maps API key (google-maps.api-key) not found in configuration!")
                sys.exit(1)

            logger.info("Configuration loaded and merged successfully, dood!")
            return config

        except (OSError, tomli.TOMLDecodeError) as e:
            logger.error(f"Failed to load configuration: {e}")
            sys.exit(1)

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getGoogleMapsConfig(self) -> GoogleMapsConfigDict:
        """
        Get the ``[google-maps]`` section: api-key, timeout, language,
        base-url, ``[google-maps.retry]`` and ``[google-maps.ratelimits.<api>]``.
        """
        return self.get("google-maps", {})

    def getApiKey(self) -> str:
        """Get the Google Maps API key, exiting on the example placeholder."""
        apiKey = self.getGoogleMapsConfig().get("api-key", "")
        if apiKey in ["", API_KEY_PLACEHOLDER] or apiKey.startswith("${"):
            logger.error("Please set your Google Maps API key in config.toml or GOOGLE_MAPS_API_KEY!")
            sys.exit(1)
        return apiKey

    def getClientConfiguration(self) -> ClientConfiguration:
        """
        Build the client configuration from the ``[google-maps]`` section.

        Raises:
            SystemExit: If the section holds invalid values
        """
        self.getApiKey()
        try:
            config = ClientConfiguration.fromDict(self.getGoogleMapsConfig())
            config.validate()
        except ConfigurationError as e:
            logger.error(f"Invalid google-maps configuration: {e}")
            sys.exit(1)
        return config
