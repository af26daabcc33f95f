#!/usr/bin/env python3
"""
Configuration loading for the publication app
Values come from config/config.json, overridden by environment variables
"""

import json
import os
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULTS = {
    'EVENTBRITE_APPLICATION_KEY': None,
    'EVENTBRITE_CLIENT_SECRET': None,
    'EVENTBRITE_AUTHORIZE_URL': 'https://www.eventbrite.com/oauth/authorize',
    'EVENTBRITE_TOKEN_URL': 'https://www.eventbrite.com/oauth/token',
    'EVENTBRITE_API_URL': 'https://www.eventbrite.com/json/',
    'REQUEST_TIMEOUT': 30,
    'EXCLUDE_PAST_EVENTS': False,
}

# Keys that may appear (lower-cased) in config.json
FILE_KEYS = {key.lower(): key for key in DEFAULTS}


def get_project_root():
    """Get absolute path to project root directory"""
    current_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.dirname(current_dir)


def get_config_path() -> str:
    """Path of the JSON config file, overridable with PUBLICATION_CONFIG_FILE"""
    return os.getenv(
        'PUBLICATION_CONFIG_FILE',
        os.path.join(get_project_root(), 'config', 'config.json')
    )


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Read settings from the JSON config file, if there is one"""
    if not os.path.exists(config_path):
        logger.info(f"No config file at {config_path}, using defaults and environment")
        return {}

    with open(config_path, 'r') as f:
        config_data = json.load(f)

    settings = {}
    for key, value in config_data.items():
        setting = FILE_KEYS.get(key.lower())
        if setting:
            settings[setting] = value
        else:
            logger.warning(f"Ignoring unknown config key: {key}")

    logger.info(f"Configuration loaded from {config_path}")
    return settings


def load_project_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the app settings
    Environment credentials replace the file's credentials as a pair
    """
    load_dotenv(os.path.join(get_project_root(), '.env'))

    config = dict(DEFAULTS)
    config.update(load_config_file(config_path or get_config_path()))

    env_key = os.getenv('EVENTBRITE_APPLICATION_KEY')
    env_secret = os.getenv('EVENTBRITE_CLIENT_SECRET')
    if env_key or env_secret:
        config['EVENTBRITE_APPLICATION_KEY'] = env_key
        config['EVENTBRITE_CLIENT_SECRET'] = env_secret
        logger.info("Using Eventbrite credentials from environment")

    config['SECRET_KEY'] = os.getenv('FLASK_SECRET_KEY') or 'dev-key-change-in-production'
    return config
