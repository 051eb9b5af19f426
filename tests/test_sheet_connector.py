"""Tests for the CSV feed connector, with requests mocked out."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from connectors.sheet_connector import SheetConnector
from utils.exceptions import NetworkError

FEED_URL = "https://example.com/export?format=csv"


def make_response(status=200, content_type="text/csv; charset=utf-8", text="a,b\n1,2"):
    response = MagicMock()
    response.status_code = status
    response.headers = {"content-type": content_type} if content_type else {}
    response.text = text
    response.encoding = None
    return response


def test_requires_url():
    with pytest.raises(ValueError):
        SheetConnector("")


@patch("connectors.sheet_connector.requests.get")
def test_fetch_returns_text(mock_get):
    mock_get.return_value = make_response()
    assert SheetConnector(FEED_URL).fetch_csv_text() == "a,b\n1,2"
    mock_get.assert_called_once_with(FEED_URL)


@patch("connectors.sheet_connector.requests.get")
def test_defaults_to_utf8_without_charset(mock_get):
    response = make_response(content_type="text/csv")
    mock_get.return_value = response
    SheetConnector(FEED_URL).fetch_csv_text()
    assert response.encoding == "utf-8"


def make_real_response(status, content_type="text/csv", body=b"PartNumber,Brand,Pret client in lei/buc\n"):
    response = requests.models.Response()
    response.status_code = status
    response.headers["content-type"] = content_type
    response._content = body
    return response


@pytest.mark.parametrize("status", [300, 304, 404, 500])
@patch("connectors.sheet_connector.requests.get")
def test_rejects_non_2xx_status(mock_get, status):
    mock_get.return_value = make_real_response(status)
    with pytest.raises(NetworkError, match=str(status)):
        SheetConnector(FEED_URL).fetch_csv_text()


@patch("connectors.sheet_connector.requests.get")
def test_accepts_real_200_response(mock_get):
    mock_get.return_value = make_real_response(200)
    assert SheetConnector(FEED_URL).fetch_csv_text().startswith("PartNumber,Brand")


@patch("connectors.sheet_connector.requests.get")
def test_non_ok_status(mock_get):
    mock_get.return_value = make_response(status=404)
    with pytest.raises(NetworkError, match="404"):
        SheetConnector(FEED_URL).fetch_csv_text()


@pytest.mark.parametrize("content_type", ["text/html; charset=utf-8", None])
@patch("connectors.sheet_connector.requests.get")
def test_wrong_content_type(mock_get, content_type):
    mock_get.return_value = make_response(content_type=content_type)
    with pytest.raises(NetworkError):
        SheetConnector(FEED_URL).fetch_csv_text()


@patch("connectors.sheet_connector.requests.get")
def test_transport_failure(mock_get):
    mock_get.side_effect = requests.exceptions.ConnectionError("boom")
    with pytest.raises(NetworkError):
        SheetConnector(FEED_URL).fetch_csv_text()
