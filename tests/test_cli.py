"""
Tests for CLI commands.
"""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from yousign_client.cli import cli
from yousign_client.config import ConfigManager
from yousign_client.exceptions import ArgumentError, NotFoundError

from .conftest import API_KEY, FILE_UUID, PROCEDURE_UUID, USER_UUID


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_config():
    """Create mock configuration."""
    with patch('yousign_client.cli.get_config_manager') as mock:
        config_manager = MagicMock()
        config_manager.get.return_value = MagicMock(
            api_key=API_KEY,
            is_testing=True,
            log_file="",
            is_configured=MagicMock(return_value=True)
        )
        mock.return_value = config_manager
        yield config_manager


@pytest.fixture
def mock_client():
    """Patch the API client used by commands."""
    with patch('yousign_client.cli.YousignClient') as mock:
        instance = MagicMock()
        instance.__enter__ = MagicMock(return_value=instance)
        instance.__exit__ = MagicMock(return_value=False)
        mock.return_value = instance
        yield instance


class TestCLI:
    """Tests for main CLI."""
    
    def test_version(self, runner):
        """Test version option."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'yousign' in result.output.lower()
    
    def test_help(self, runner):
        """Test help output."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Yousign CLI' in result.output


class TestConfigureCommand:
    """Tests for configure command."""
    
    def test_configure_show(self, runner, mock_config):
        """Test showing current configuration."""
        result = runner.invoke(cli, ['configure', '--show'])
        assert result.exit_code == 0
        assert 'staging' in result.output
        assert API_KEY not in result.output
    
    def test_configure_with_options(self, runner, mock_config):
        """Test configuration with options."""
        result = runner.invoke(cli, ['configure', '--api-key', API_KEY, '--testing'])
        assert result.exit_code == 0
        mock_config.update.assert_called_once_with(api_key=API_KEY, is_testing=True)
    
    def test_configure_writes_file(self, runner, tmp_path, monkeypatch):
        """Test that configure persists to the config directory."""
        monkeypatch.delenv('YOUSIGN_API_KEY', raising=False)
        result = runner.invoke(cli, [
            '--config-dir', str(tmp_path),
            'configure', '--api-key', API_KEY, '--production'
        ])
        assert result.exit_code == 0
        config = ConfigManager(tmp_path).get()
        assert config.api_key == API_KEY
        assert config.is_testing is False


class TestUsersCommands:
    """Tests for users commands."""
    
    def test_not_configured(self, runner):
        """Test commands when no API key is set."""
        with patch('yousign_client.cli.get_config_manager') as mock:
            config_manager = MagicMock()
            config_manager.get.return_value = MagicMock(
                api_key="",
                is_configured=MagicMock(return_value=False)
            )
            mock.return_value = config_manager
            
            result = runner.invoke(cli, ['users', 'list'])
            assert result.exit_code == 1
            assert 'not configured' in result.output.lower()
    
    def test_list(self, runner, mock_config, mock_client):
        """Test listing users."""
        mock_client.get_users.return_value = [{
            'id': '/users/' + USER_UUID,
            'firstname': 'Ada',
            'lastname': 'Lovelace',
            'email': 'ada@example.com',
            'phone': '+33612345678',
            'status': 'activated',
        }]
        
        result = runner.invoke(cli, ['users', 'list'])
        
        assert result.exit_code == 0
        assert 'Ada Lovelace' in result.output
        assert USER_UUID in result.output
    
    def test_list_json(self, runner, mock_config, mock_client):
        """Test JSON output."""
        mock_client.get_users.return_value = [{'id': '/users/' + USER_UUID}]
        result = runner.invoke(cli, ['users', 'list', '--format', 'json'])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{'id': '/users/' + USER_UUID}]
    
    def test_get_accepts_server_id(self, runner, mock_config, mock_client):
        """Test that '/users/<uuid>' is reduced to the UUID."""
        mock_client.get_user.return_value = {'id': '/users/' + USER_UUID, 'firstname': 'Ada'}
        result = runner.invoke(cli, ['users', 'get', '/users/' + USER_UUID])
        assert result.exit_code == 0
        mock_client.get_user.assert_called_once_with(USER_UUID)
    
    def test_get_not_found(self, runner, mock_config, mock_client):
        """Test a missing user."""
        mock_client.get_user.side_effect = NotFoundError("Resource not found", status_code=404)
        result = runner.invoke(cli, ['users', 'get', USER_UUID])
        assert result.exit_code == 1
        assert 'not found' in result.output.lower()
    
    def test_get_empty_response(self, runner, mock_config, mock_client):
        """Test that an empty API response is reported, not crashed on."""
        mock_client.get_user.return_value = None
        result = runner.invoke(cli, ['users', 'get', USER_UUID])
        assert result.exit_code == 1
        assert 'Unexpected empty or malformed User response' in result.output
        assert 'Unexpected error' not in result.output
    
    def test_create_empty_response(self, runner, mock_config, mock_client):
        """Test creating a user when the API returns no body."""
        mock_client.post_user.return_value = None
        result = runner.invoke(cli, [
            'users', 'create',
            '--firstname', 'Ada', '--lastname', 'Lovelace',
            '--email', 'ada@example.com', '--phone', '+33612345678'
        ])
        assert result.exit_code == 1
        assert 'Unexpected empty or malformed User response' in result.output
    
    def test_create_invalid_argument(self, runner, mock_config, mock_client):
        """Test that argument errors are reported."""
        mock_client.post_user.side_effect = ArgumentError('phone', 'is not a valid phone number')
        result = runner.invoke(cli, [
            'users', 'create',
            '--firstname', 'Ada', '--lastname', 'Lovelace',
            '--email', 'ada@example.com', '--phone', '123'
        ])
        assert result.exit_code == 1
        assert 'phone' in result.output
    
    def test_delete_with_confirmation(self, runner, mock_config, mock_client):
        """Test delete with confirmation."""
        result = runner.invoke(cli, ['users', 'delete', USER_UUID], input='y\n')
        assert result.exit_code == 0
        mock_client.delete_user.assert_called_once_with(USER_UUID)
    
    def test_delete_cancelled(self, runner, mock_config, mock_client):
        """Test delete cancellation."""
        result = runner.invoke(cli, ['users', 'delete', USER_UUID], input='n\n')
        assert result.exit_code == 0
        assert 'Cancelled' in result.output
        mock_client.delete_user.assert_not_called()


class TestProcedureCommands:
    """Tests for procedures commands."""
    
    def test_create(self, runner, mock_config, mock_client):
        """Test creating a procedure without starting it."""
        mock_client.post_procedure.return_value = {'id': '/procedures/' + PROCEDURE_UUID, 'name': 'Contract'}
        result = runner.invoke(cli, ['procedures', 'create', 'Contract'])
        assert result.exit_code == 0
        mock_client.post_procedure.assert_called_once_with('Contract', '', False, None, None)
        assert 'Contract' in result.output
    
    def test_create_with_members_file(self, runner, mock_config, mock_client, tmp_path):
        """Test starting a procedure with members from a file."""
        members_file = tmp_path / "members.json"
        members_file.write_text('[{"firstname": "Ada"}]')
        mock_client.post_procedure.return_value = {'id': '/procedures/' + PROCEDURE_UUID}
        
        result = runner.invoke(cli, [
            'procedures', 'create', 'Contract', '--start', '--members-file', str(members_file)
        ])
        
        assert result.exit_code == 0
        args = mock_client.post_procedure.call_args[0]
        assert args[2] is True
        assert args[3] == [{"firstname": "Ada"}]
    
    def test_update_requires_options(self, runner, mock_config, mock_client):
        """Test update without any change."""
        result = runner.invoke(cli, ['procedures', 'update', PROCEDURE_UUID])
        assert result.exit_code == 1
        mock_client.put_procedure.assert_not_called()
    
    def test_update_name(self, runner, mock_config, mock_client):
        """Test renaming a procedure."""
        mock_client.put_procedure.return_value = {'name': 'Renamed'}
        result = runner.invoke(cli, ['procedures', 'update', PROCEDURE_UUID, '--name', 'Renamed'])
        assert result.exit_code == 0
        mock_client.put_procedure.assert_called_once_with(
            PROCEDURE_UUID, name='Renamed', description=None, start=None, members=None, config=None
        )


class TestFileCommands:
    """Tests for files commands."""
    
    def test_upload(self, runner, mock_config, mock_client, tmp_path):
        """Test uploading a local PDF."""
        pdf = tmp_path / "contract.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        mock_client.post_file.return_value = {'id': '/files/' + FILE_UUID}
        
        result = runner.invoke(cli, ['files', 'upload', str(pdf)])
        
        assert result.exit_code == 0
        mock_client.post_file.assert_called_once_with(
            'contract.pdf', base64.b64encode(b"%PDF-1.4").decode('ascii'), 'signable', None
        )
        assert FILE_UUID in result.output
    
    def test_download(self, runner, mock_config, mock_client, tmp_path):
        """Test downloading and decoding file content."""
        output = tmp_path / "out" / "signed.pdf"
        mock_client.get_file_contents.return_value = base64.b64encode(b"%PDF-signed").decode('ascii')
        
        result = runner.invoke(cli, ['files', 'download', FILE_UUID, '-o', str(output)])
        
        assert result.exit_code == 0
        assert output.read_bytes() == b"%PDF-signed"
    
    def test_download_bad_content(self, runner, mock_config, mock_client, tmp_path):
        """Test a download that is not base64."""
        mock_client.get_file_contents.return_value = {'unexpected': True}
        result = runner.invoke(cli, ['files', 'download', FILE_UUID, '-o', str(tmp_path / "x.pdf")])
        assert result.exit_code == 1
