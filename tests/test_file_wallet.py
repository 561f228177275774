"""
Tests for the JSON file wallet backend.
"""
import json

import pytest

from multiwallet.core.exceptions import WalletClosedError
from multiwallet.core.wallet_types import WalletLocation
from multiwallet.storage.file_wallet import FileWallet, FileWalletCapability, wallet_data_file


def location(path, name=None) -> WalletLocation:
    return WalletLocation(path=path, name=name if name is not None else path.name)


class TestVerify:

    def setup_method(self):
        self.capability = FileWalletCapability()

    def test_missing_wallet_is_creatable(self, tmp_path):
        result = self.capability.verify(location(tmp_path / "fresh"), salvage=False)
        assert result.ok
        assert result.error is None

    def test_existing_wallet_verifies(self, tmp_path):
        assert self.capability.create_from_file(location(tmp_path / "w1")) is not None
        assert self.capability.verify(location(tmp_path / "w1"), salvage=False).ok

    def test_data_file_must_be_regular_file(self, tmp_path):
        (tmp_path / "w1" / "wallet.dat").mkdir(parents=True)
        result = self.capability.verify(location(tmp_path / "w1"), salvage=False)
        assert not result.ok
        assert "must be a regular file" in result.error

    def test_corrupt_wallet_without_salvage(self, tmp_path):
        (tmp_path / "w1").mkdir()
        (tmp_path / "w1" / "wallet.dat").write_text("{not json")

        result = self.capability.verify(location(tmp_path / "w1"), salvage=False)

        assert not result.ok
        assert "-salvagewallet" in result.error
        assert (tmp_path / "w1" / "wallet.dat").read_text() == "{not json"

    def test_corrupt_wallet_with_salvage(self, tmp_path):
        (tmp_path / "w1").mkdir()
        (tmp_path / "w1" / "wallet.dat").write_text("{not json")

        result = self.capability.verify(location(tmp_path / "w1"), salvage=True)

        assert result.ok
        assert result.warning.startswith("Warning: Wallet file corrupt, data salvaged!")
        backups = list((tmp_path / "w1").glob("wallet.dat.*.bak"))
        assert len(backups) == 1
        assert backups[0].read_text() == "{not json"
        document = json.loads((tmp_path / "w1" / "wallet.dat").read_text())
        assert document['records'] == {}

    def test_document_without_records_is_corrupt(self, tmp_path):
        (tmp_path / "w1").mkdir()
        (tmp_path / "w1" / "wallet.dat").write_text(json.dumps({"version": 1}))
        assert not self.capability.verify(location(tmp_path / "w1"), salvage=False).ok


class TestCreateAndFlush:

    def setup_method(self):
        self.capability = FileWalletCapability()

    def test_creates_directory_and_document(self, tmp_path):
        wallet = self.capability.create_from_file(location(tmp_path / "nested" / "w1"))
        assert isinstance(wallet, FileWallet)
        assert (tmp_path / "nested" / "w1" / "wallet.dat").is_file()
        assert wallet.get_record("anything") is None

    def test_legacy_flat_file_is_its_own_data_file(self, tmp_path):
        flat = tmp_path / "old_wallet.dat"
        flat.write_text(json.dumps({"version": 1, "records": {"label": "savings"}}))

        assert wallet_data_file(flat) == flat
        wallet = self.capability.create_from_file(location(flat))

        assert wallet.get_record("label") == "savings"
        assert wallet.data_file == flat

    def test_unreadable_wallet_is_not_constructed(self, tmp_path):
        (tmp_path / "w1").mkdir()
        (tmp_path / "w1" / "wallet.dat").write_text("garbage")
        assert self.capability.create_from_file(location(tmp_path / "w1")) is None

    def test_soft_flush_writes_only_dirty_state(self, tmp_path):
        wallet = self.capability.create_from_file(location(tmp_path / "w1"))
        wallet.flush(False)
        assert wallet.flush_count == 0

        wallet.set_record("label", "savings")
        wallet.maintain()

        assert wallet.flush_count == 1
        assert not wallet.dirty
        document = json.loads(wallet.data_file.read_text())
        assert document['records'] == {"label": "savings"}

    def test_hard_flush_closes_the_wallet(self, tmp_path):
        wallet = self.capability.create_from_file(location(tmp_path / "w1"))
        wallet.post_init()
        assert wallet.live

        wallet.flush(True)

        assert wallet.closed
        assert not wallet.live
        with pytest.raises(WalletClosedError):
            wallet.set_record("label", "late")

    def test_unload_after_stop_is_harmless(self, tmp_path):
        wallet = self.capability.create_from_file(location(tmp_path / "w1"))
        wallet.set_record("label", "savings")
        wallet.flush(True)
        count = wallet.flush_count

        self.capability.unload(wallet)

        assert wallet.flush_count == count
        reopened = self.capability.create_from_file(location(tmp_path / "w1"))
        assert reopened.get_record("label") == "savings"

    def test_no_temporary_files_left_behind(self, tmp_path):
        wallet = self.capability.create_from_file(location(tmp_path / "w1"))
        wallet.set_record("k", 1)
        wallet.flush(False)
        assert sorted(p.name for p in (tmp_path / "w1").iterdir()) == ["wallet.dat"]
