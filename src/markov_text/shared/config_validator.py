"""Configuration validation and loading framework."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config_schema import (
    DEFAULT_USER_AGENT,
    AppConfig,
    FetchConfig,
    GeneratorConfig,
    LogLevel,
)

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigLoader:
    """Load and validate configuration from the environment."""

    def __init__(self, strict: bool = True):
        """
        Initialize config loader.

        Args:
            strict: If True, raise errors on validation failure.
                   If False, log warnings and use defaults.
        """
        self.strict = strict
        self.validation_errors: List[str] = []

    def load_from_env(self, env: Optional[Dict[str, str]] = None) -> AppConfig:
        """
        Load configuration from environment variables.

        Args:
            env: Optional dictionary of environment variables.
                If None, uses os.environ.

        Returns:
            Validated AppConfig instance.

        Raises:
            ConfigValidationError: If validation fails in strict mode.
        """
        env = dict(os.environ) if env is None else env
        self.validation_errors = []

        try:
            config = AppConfig(
                log_level=LogLevel(env.get("LOG_LEVEL", "WARNING").upper()),
                event_log_file=env.get("MARKOV_EVENT_LOG") or None,
                generator=self._load_generator_config(env),
                fetch=self._load_fetch_config(env),
            )
            logger.debug("Configuration loaded: %s", config.to_dict())
            return config

        except ValidationError as e:
            self.validation_errors = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            return self._fail(f"Configuration validation failed: {e}", e)

        except ValueError as e:
            self.validation_errors = [str(e)]
            return self._fail(f"Failed to load configuration: {e}", e)

    def _fail(self, error_msg: str, cause: Exception) -> AppConfig:
        if self.strict:
            raise ConfigValidationError(error_msg) from cause
        logger.warning(error_msg)
        return self._get_minimal_config()

    def _load_generator_config(self, env: Dict[str, str]) -> GeneratorConfig:
        """Load chain order, output bound and seed."""
        seed = env.get("MARKOV_SEED")
        return GeneratorConfig(
            order=int(env.get("MARKOV_ORDER", 1)),
            max_words=int(env.get("MARKOV_MAX_WORDS", 100)),
            seed=int(seed) if seed not in (None, "") else None,
        )

    def _load_fetch_config(self, env: Dict[str, str]) -> FetchConfig:
        """Load HTTP corpus fetch settings."""
        return FetchConfig(
            timeout_sec=float(env.get("MARKOV_FETCH_TIMEOUT", 10.0)),
            user_agent=env.get("MARKOV_USER_AGENT", DEFAULT_USER_AGENT),
            max_bytes=int(env.get("MARKOV_FETCH_MAX_BYTES", 10 * 1024 * 1024)),
            allow_redirects=env.get("MARKOV_FETCH_ALLOW_REDIRECTS", "true").lower()
            == "true",
        )

    def _get_minimal_config(self) -> AppConfig:
        """Return minimal valid configuration as fallback."""
        return AppConfig()

    def apply_overrides(self, config: AppConfig, **overrides: Any) -> AppConfig:
        """
        Return a copy of ``config`` with generator settings replaced.

        ``None`` values are ignored so unset command-line flags keep the
        environment value.

        Raises:
            ConfigValidationError: If an override is out of range.
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return config
        try:
            generator = GeneratorConfig(**{**config.generator.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid generator settings: {e}") from e
        return config.model_copy(update={"generator": generator})

    def validate_config(self, config: AppConfig) -> Tuple[bool, List[str]]:
        """
        Check settings that are individually valid but unusable together.

        Args:
            config: Configuration to validate.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors: List[str] = []

        if config.event_log_file:
            log_dir = Path(config.event_log_file).parent
            if log_dir.exists() and not log_dir.is_dir():
                errors.append(
                    f"MARKOV_EVENT_LOG parent {log_dir} exists and is not a directory"
                )

        if config.generator.max_words == 0:
            logger.warning("MARKOV_MAX_WORDS=0: every generated text will be empty")

        return len(errors) == 0, errors
