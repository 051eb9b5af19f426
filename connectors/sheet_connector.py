# wheel_catalog/connectors/sheet_connector.py
import requests
import logging

from utils.exceptions import NetworkError

logger = logging.getLogger(__name__)


class SheetConnector:
    """Downloads the published CSV export of the price list spreadsheet."""

    def __init__(self, feed_url, expected_content_type="text/csv"):
        self.feed_url = feed_url
        self.expected_content_type = expected_content_type
        if not feed_url:
            logger.error("Catalog feed URL is not provided.")
            raise ValueError("Catalog feed URL is required.")

    def fetch_csv_text(self):
        """
        Fetches the feed and returns its body as text.
        :return: The CSV payload.
        :raises NetworkError: On transport failure, a non-2xx status or a non-CSV response.
        """
        logger.info(f"Fetching catalog feed from {self.feed_url}")
        try:
            response = requests.get(self.feed_url)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching catalog feed: {e}")
            raise NetworkError(f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Catalog feed returned status {response.status_code}")
            raise NetworkError(f"Network error. Status: {response.status_code}")

        content_type = response.headers.get("content-type")
        if not content_type or self.expected_content_type not in content_type:
            logger.error(f"Catalog feed returned unexpected content type: {content_type}")
            raise NetworkError(
                "The received file is not valid CSV. The link may be invalid or require authentication."
            )

        # requests falls back to ISO-8859-1 for text/* without a charset
        if "charset" not in content_type.lower():
            response.encoding = "utf-8"
        text = response.text
        logger.info(f"Fetched {len(text)} characters from catalog feed.")
        return text
