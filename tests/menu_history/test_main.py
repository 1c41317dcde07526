"""
Tests for menu_history.main module
"""

import json
from unittest.mock import patch

import pytest

from common.errors import FetchError
from menu_history.main import main


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    for name in ('MENU_SOURCE_URL', 'MENU_DATA_DIR', 'MENU_STORAGE_KEY'):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / 'menu.json'
    path.write_text(json.dumps({
        'name': 'Test Menu',
        'source_url': 'https://menu.example.test/',
        'ignore': ['oběd'],
        'data_dir': str(tmp_path / 'data'),
    }), encoding='utf-8')
    return path


class TestRefreshCommand:
    """Tests for the scheduled trigger"""

    @patch('menu_history.pipeline.fetch_page')
    def test_success(self, mock_fetch, config_file, sample_page, tmp_path):
        mock_fetch.return_value = sample_page

        assert main(['--config', str(config_file), 'refresh']) == 0
        assert (tmp_path / 'data' / 'daily_meals_v2.json').exists()

    @patch('menu_history.pipeline.fetch_page')
    def test_fetch_failure_exit_code(self, mock_fetch, config_file, tmp_path):
        """Test that a failed run is reported with a non-zero exit code"""
        mock_fetch.side_effect = FetchError('https://menu.example.test/', 'Unexpected status 502', status_code=502)

        assert main(['--config', str(config_file), 'refresh']) == 1
        assert not (tmp_path / 'data' / 'daily_meals_v2.json').exists()

    @patch('menu_history.pipeline.fetch_page')
    def test_extraction_failure_exit_code(self, mock_fetch, config_file):
        mock_fetch.return_value = '<html>maintenance</html>'

        assert main(['--config', str(config_file), 'refresh']) == 1

    @patch('menu_history.main.refresh_and_persist')
    def test_runtime_value_error_is_not_a_config_error(self, mock_refresh, config_file, capsys):
        """Test that a ValueError raised during the run is not reported as a configuration problem"""
        mock_refresh.side_effect = ValueError('bad timestamp')

        with pytest.raises(ValueError, match='bad timestamp'):
            main(['--config', str(config_file), 'refresh'])

        assert 'Configuration Error' not in capsys.readouterr().out

    def test_config_error_exit_code(self, tmp_path):
        assert main(['--config', str(tmp_path / 'missing.json'), 'refresh']) == 1


class TestShowCommand:
    """Tests for reading the stored history"""

    @patch('menu_history.pipeline.fetch_page')
    def test_first_show_refreshes(self, mock_fetch, config_file, sample_page, capsys):
        mock_fetch.return_value = sample_page

        assert main(['--config', str(config_file), 'show', '--format', 'json']) == 0

        mock_fetch.assert_called_once()
        out = capsys.readouterr().out
        assert '"name": "Soup"' in out

    @patch('menu_history.pipeline.fetch_page')
    def test_second_show_reads_store(self, mock_fetch, config_file, sample_page):
        mock_fetch.return_value = sample_page
        main(['--config', str(config_file), 'refresh'])
        mock_fetch.reset_mock()

        assert main(['--config', str(config_file), 'show']) == 0
        mock_fetch.assert_not_called()

    @patch('menu_history.pipeline.fetch_page')
    def test_show_to_file(self, mock_fetch, config_file, sample_page, tmp_path):
        mock_fetch.return_value = sample_page
        output = tmp_path / 'site' / 'index.html'

        assert main(['--config', str(config_file), 'show', '--format', 'html', '--output', str(output)]) == 0
        assert 'Soup' in output.read_text(encoding='utf-8')

    @patch('menu_history.pipeline.fetch_page')
    def test_rss_requires_output(self, mock_fetch, config_file, sample_page):
        mock_fetch.return_value = sample_page

        assert main(['--config', str(config_file), 'show', '--format', 'rss']) == 2

    @patch('menu_history.pipeline.fetch_page')
    def test_rss_to_file(self, mock_fetch, config_file, sample_page, tmp_path):
        mock_fetch.return_value = sample_page
        output = tmp_path / 'menu.rss'

        assert main(['--config', str(config_file), 'show', '--format', 'rss', '--output', str(output)]) == 0
        assert output.exists()

    @patch('menu_history.pipeline.fetch_page')
    def test_show_failure_exit_code(self, mock_fetch, config_file):
        """Test that a failed first-read refresh is reported as a failure"""
        mock_fetch.return_value = 'no menu here'

        assert main(['--config', str(config_file), 'show']) == 1
