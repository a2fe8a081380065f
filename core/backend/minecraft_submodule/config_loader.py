"""
Configuration Loader

Loads and validates the YAML build description.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional

import yaml

from .config import CONFIG_FILE_NAME, DEFAULT_PROPERTIES, REQUIRED_PROPERTIES, USER_CONFIG_FILE
from .errors import ConfigurationError
from .platforms import Platform, validate_path

logger = logging.getLogger(__name__)

DEPENDENCY_FLAGS = ("transitive", "api", "include", "propagate_as_mod")


def get_config_paths() -> list[Path]:
    """
    Get list of build description paths to check in priority order

    Returns:
        List of paths to check (first found wins)
    """
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        USER_CONFIG_FILE,
    ]


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load the build description from a YAML file

    Args:
        config_path: Optional explicit path to the build description

    Returns:
        Dict with 'properties' and 'modules'

    Raises:
        ConfigurationError: The file is not valid YAML
    """
    config = {
        'properties': dict(DEFAULT_PROPERTIES),
        'modules': {},
    }

    if config_path:
        config_files = [config_path]
    else:
        config_files = get_config_paths()

    loaded_from = None
    for path in config_files:
        if path.exists():
            loaded_from = path
            break

    if not loaded_from:
        logger.info("No build description found, using defaults")
        return config

    logger.info(f"Loading build description from: {loaded_from}")

    try:
        with open(loaded_from, 'r', encoding='utf-8') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML in {loaded_from}: {e}") from e

    if not user_config:
        logger.warning(f"Build description {loaded_from} is empty")
        return config

    user_config = substitute_env_vars(user_config)

    if 'properties' in user_config:
        config['properties'].update(user_config['properties'] or {})

    if 'modules' in user_config:
        config['modules'] = user_config['modules'] or {}

    config['root'] = loaded_from.parent

    logger.info(f"✓ Loaded {len(config['modules'])} module(s) from build description")
    return config


def substitute_env_vars(config):
    """
    Substitute environment variables in config values

    Handles patterns like:
    - ${ENV_VAR}
    - ${ENV_VAR:-default_value}

    Only upper-case names are treated as environment variables, so
    lower-case tokens such as ${platform} pass through untouched.
    """
    pattern = re.compile(r'\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}')

    def replacer(match):
        var_name = match.group(1)
        default_value = match.group(2) or ""
        return os.environ.get(var_name, default_value)

    def substitute_value(value):
        if isinstance(value, str):
            return pattern.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: substitute_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [substitute_value(item) for item in value]
        else:
            return value

    return substitute_value(config)


def _validate_dependency(module_path: str, index: int, entry, errors: list[str]):
    where = f"Module '{module_path}' dependency #{index + 1}"

    if not isinstance(entry, dict):
        errors.append(f"{where} must be a mapping")
        return

    kinds = [k for k in ('project', 'external') if k in entry]
    if len(kinds) != 1:
        errors.append(f"{where} must set exactly one of 'project' or 'external'")
        return

    if 'project' in entry:
        try:
            validate_path(entry['project'])
        except ConfigurationError as e:
            errors.append(f"{where}: {e}")
    elif not isinstance(entry['external'], (str, dict)):
        errors.append(f"{where}: 'external' must be a coordinate string or a platform mapping")

    for flag in DEPENDENCY_FLAGS:
        if flag in entry and not isinstance(entry[flag], bool):
            errors.append(f"{where}: '{flag}' must be true or false")

    unknown = set(entry) - {'project', 'external', *DEPENDENCY_FLAGS}
    if unknown:
        errors.append(f"{where} has unknown keys: {', '.join(sorted(unknown))}")


def validate_config(config: Dict) -> tuple[bool, list[str]]:
    """
    Validate build description structure

    Args:
        config: Build description dict to validate

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []
    modules = config.get('modules') or {}
    properties = config.get('properties') or {}

    if not modules:
        errors.append("Build description must define at least one module in 'modules' section")

    for module_path, module_config in modules.items():
        try:
            validate_path(module_path)
        except ConfigurationError as e:
            errors.append(str(e))

        if not isinstance(module_config, dict):
            errors.append(f"Module '{module_path}' must be a mapping")
            continue

        merged = {**properties, **(module_config.get('properties') or {})}
        for name in REQUIRED_PROPERTIES:
            if merged.get(name) in (None, "") and not (name == "java_version" and os.environ.get("JAVA_VERSION")):
                errors.append(f"Module '{module_path}' missing required property '{name}'")

        platform_name = module_config.get('platform')
        platform = None
        if not platform_name:
            errors.append(f"Module '{module_path}' missing required 'platform' field")
        else:
            try:
                platform = Platform.parse(platform_name)
            except ConfigurationError as e:
                errors.append(f"Module '{module_path}': {e}")

        connect = module_config.get('connect')
        if connect is not None:
            if platform is Platform.XPLAT:
                errors.append(f"Module '{module_path}' is a shared module and cannot connect")
            if connect not in modules:
                errors.append(f"Module '{module_path}' connects to undefined module '{connect}'")
            elif (modules[connect] or {}).get('platform') != Platform.XPLAT.value:
                errors.append(f"Module '{module_path}' connects to '{connect}', which is not an xplat module")

        dependencies = module_config.get('dependencies') or []
        if not isinstance(dependencies, list):
            errors.append(f"Module '{module_path}' 'dependencies' must be a list")
            continue
        for index, entry in enumerate(dependencies):
            _validate_dependency(module_path, index, entry, errors)

    is_valid = len(errors) == 0
    return is_valid, errors
