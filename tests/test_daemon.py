"""
End to end tests for the daemon against the file wallet backend.
"""
import pytest

import multiwalletd
from multiwallet.config.config_manager import ConfigManager
from multiwallet.core.wallet_types import LifecycleState


@pytest.fixture
def manager(data_dir):
    manager = ConfigManager()
    manager.apply_cli_options({'datadir': str(data_dir)})
    return manager


class TestMultiwalletDaemon:

    def test_start_creates_wallets_and_stop_releases_them(self, manager, data_dir):
        manager.apply_cli_options({'wallet': ['w1', 'w2']})
        daemon = multiwalletd.MultiwalletDaemon(manager)

        assert daemon.start() is True
        try:
            assert len(daemon.lifecycle.registry) == 2
            assert daemon.scheduler.running
        finally:
            daemon.stop()

        assert (data_dir / "w1" / "wallet.dat").is_file()
        assert (data_dir / "w2" / "wallet.dat").is_file()
        assert len(daemon.lifecycle.registry) == 0
        assert daemon.lifecycle.state == LifecycleState.UNLOADED
        assert not daemon.scheduler.running

    def test_default_wallet_lives_in_wallets_subdirectory(self, manager, data_dir):
        (data_dir / "wallets").mkdir()
        daemon = multiwalletd.MultiwalletDaemon(manager)
        assert daemon.start()
        daemon.stop()
        assert (data_dir / "wallets" / "wallet.dat").is_file()

    def test_failed_start_reports_errors(self, manager, capsys):
        manager.apply_cli_options({'wallet': ['w1', 'w1']})
        daemon = multiwalletd.MultiwalletDaemon(manager)

        assert daemon.start() is False
        daemon.stop()

        assert "Duplicate -wallet filename specified." in capsys.readouterr().err
        assert not daemon.scheduler.running


class TestMain:

    def test_invalid_combination_exits_with_error(self, data_dir, capsys):
        code = multiwalletd.main(['-datadir', str(data_dir), '-wallet', 'a', '-wallet', 'b', '-upgradewallet'])
        assert code == 1
        assert "-upgradewallet is only allowed with a single wallet file" in capsys.readouterr().err

    def test_bad_config_file_exits_with_error(self, tmp_path, capsys):
        config = tmp_path / "multiwallet.yaml"
        config.write_text("wallet:\n  unknown_option: 1\n")
        assert multiwalletd.main(['--config', str(config)]) == 1
        assert "Configuration validation error" in capsys.readouterr().err
