"""
Tests for common.scraper module
"""

import pytest
import requests
from unittest.mock import Mock, patch

from common.errors import FetchError
from common.scraper import fetch_page


def _response(status_code=200, text='', encoding='utf-8'):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.encoding = encoding
    response.apparent_encoding = 'utf-8'
    return response


class TestFetchPage:
    """Tests for the single GET against the source page"""

    @patch('common.scraper.requests.get')
    def test_returns_body_on_success(self, mock_get):
        """Test that the page body is returned for a 200 response"""
        mock_get.return_value = _response(text='<html>menu</html>')

        assert fetch_page('https://menu.example.test/', timeout=5) == '<html>menu</html>'
        mock_get.assert_called_once_with('https://menu.example.test/', timeout=5)

    @patch('common.scraper.requests.get')
    def test_non_success_status_raises(self, mock_get):
        """Test that a 5xx response aborts with FetchError carrying the status"""
        mock_get.return_value = _response(status_code=503)

        with pytest.raises(FetchError) as exc_info:
            fetch_page('https://menu.example.test/')

        assert exc_info.value.status_code == 503
        assert exc_info.value.url == 'https://menu.example.test/'

    @patch('common.scraper.requests.get')
    def test_transport_error_raises(self, mock_get):
        """Test that connection failures become FetchError"""
        mock_get.side_effect = requests.ConnectionError('connection refused')

        with pytest.raises(FetchError) as exc_info:
            fetch_page('https://menu.example.test/')

        assert exc_info.value.status_code is None

    @patch('common.scraper.requests.get')
    def test_no_retry(self, mock_get):
        """Test that a failed request is attempted exactly once"""
        mock_get.side_effect = requests.Timeout('timed out')

        with pytest.raises(FetchError):
            fetch_page('https://menu.example.test/')

        assert mock_get.call_count == 1

    @patch('common.scraper.requests.get')
    def test_missing_charset_uses_detected_encoding(self, mock_get):
        """Test that a latin-1 default from requests is replaced by the detected encoding"""
        response = _response(encoding='ISO-8859-1')
        mock_get.return_value = response

        fetch_page('https://menu.example.test/')

        assert response.encoding == 'utf-8'
