from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.student_store.runtime.config.config_data import ConfigData
from src.student_store.runtime.config.config_template import load_templated_yaml
from src.student_store.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_config(env_vars: EnvironmentVariables | None = None) -> ConfigData:
    """Build the configuration from config.yaml and process environment variables.

    A missing config file falls back to the model defaults. ``APP_ENVIRONMENT``,
    ``LOG_LEVEL`` and ``DATABASE_URL`` take precedence over the file.
    """
    env_vars = env_vars or EnvironmentVariables()
    config_path = Path(env_vars.config_file)

    if config_path.exists():
        config = load_templated_yaml(config_path, env_vars.environment)
    else:
        logger.info("Config file {} not found; using defaults", config_path)
        config = ConfigData()

    config.app.environment = env_vars.environment
    config.database.environment_mode = env_vars.environment
    if env_vars.log_level:
        config.logging.level = env_vars.log_level
    if env_vars.database_url:
        config.database.url = env_vars.database_url
    return config


# Global configuration instance
_default_context = AppContext(config=load_config())


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context."""
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Recursively dump a Pydantic model keeping only explicitly set fields.

    A nested model is included whole when any field inside it was set, so the
    merge below can still recurse into it.
    """
    result = {}
    explicitly_set_fields = model.model_fields_set

    for field_name in model.__class__.model_fields:
        field_value = getattr(model, field_name)

        if isinstance(field_value, BaseModel):
            nested_result = _recursive_model_dump_exclude_unset(field_value)
            if nested_result:
                result[field_name] = nested_result
            elif field_name in explicitly_set_fields:
                result[field_name] = field_value.model_dump()
        elif field_name in explicitly_set_fields:
            result[field_name] = field_value

    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries, values from override_dict winning."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge override_config into base_config, nested sections included."""
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            assert get_config().database.url == "sqlite://"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration with the provided one."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
