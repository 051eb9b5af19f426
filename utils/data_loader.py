# wheel_catalog/utils/data_loader.py
import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from connectors.sheet_connector import SheetConnector
from utils.config_loader import APP_CONFIG
from utils.csv_parser import DEFAULT_SAMPLE_SIZE, parse_catalog
from utils.exceptions import CatalogError, UnknownError

logger = logging.getLogger(__name__)


def records_to_dataframe(records):
    """Builds a string-only DataFrame; fields a record lacks become empty strings."""
    if not records:
        return pd.DataFrame()
    df = pd.DataFrame.from_records(records)
    return df.fillna("").astype(str)


def load_catalog(connector, sample_size=DEFAULT_SAMPLE_SIZE):
    """
    Fetches the feed and parses it into the product DataFrame.
    :raises CatalogError: NetworkError, EmptyTableError, HeaderNotFoundError, or UnknownError for anything else.
    """
    try:
        text = connector.fetch_csv_text()
        records = parse_catalog(text, sample_size=sample_size)
    except CatalogError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while loading the catalog.")
        raise UnknownError(f"An unknown error occurred: {e}") from e

    if not records:
        logger.warning("Catalog feed contained a header but no products.")
    return records_to_dataframe(records)


@st.cache_data(ttl=3600) # Cache data for 1 hour
def load_data():
    """
    Fetches and parses the catalog feed.
    Returns (DataFrame, last_updated, error_message); on failure the DataFrame is empty.
    """
    if "error" in APP_CONFIG:
        return pd.DataFrame(), None, f"Configuration Error: {APP_CONFIG['error']}"

    feed_config = APP_CONFIG.get('feed', {})
    parser_config = APP_CONFIG.get('parser', {})

    try:
        connector = SheetConnector(
            feed_url=feed_config.get('url'),
            expected_content_type=feed_config.get('expected_content_type', 'text/csv')
        )
        df = load_catalog(connector, sample_size=parser_config.get('delimiter_sample_size', DEFAULT_SAMPLE_SIZE))
    except (CatalogError, ValueError) as e:
        logger.error(f"Failed to load catalog: {e}")
        return pd.DataFrame(), None, str(e)

    return df, datetime.now(), None
