# wheel_catalog/utils/config_loader.py
import yaml
import os
import logging
from pathlib import Path

import streamlit as st


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

SETTINGS_PATH = Path(__file__).resolve().parent.parent / "settings.yaml"
FEED_URL_ENV = "CATALOG_FEED_URL"


def read_settings(path=SETTINGS_PATH):
    """Loads config from YAML, applying environment overrides. Returns {"error": ...} on failure."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logging.error(f"Settings file not found: {path}")
        return {"error": "settings.yaml not found."}
    except yaml.YAMLError as e:
        logging.error(f"Failed to parse settings file {path}: {e}")
        return {"error": f"settings.yaml is not valid YAML: {e}"}

    config.setdefault('feed', {})
    config.setdefault('parser', {})

    feed_url_env = os.getenv(FEED_URL_ENV)
    if feed_url_env:
        config['feed']['url'] = feed_url_env
        logging.info("Loaded catalog feed URL from environment variable.")

    if not config['feed'].get('url'):
        return {"error": "feed.url missing in settings.yaml"}

    config['feed'].setdefault('expected_content_type', 'text/csv')
    config['parser'].setdefault('delimiter_sample_size', 1000)
    return config


@st.cache_data(show_spinner=False)
def load_app_config():
    return read_settings(SETTINGS_PATH)


APP_CONFIG = load_app_config()
