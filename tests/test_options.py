"""
Tests for command line wallet options.
"""
import argparse
from decimal import Decimal

import pytest

from multiwallet.init.options import add_wallet_options, options_from_args, parse_bool


@pytest.fixture
def parser():
    return add_wallet_options(argparse.ArgumentParser())


class TestWalletOptions:

    def test_absent_options_are_unset(self, parser):
        assert options_from_args(parser.parse_args([])) == {}

    def test_bare_flag_means_true(self, parser):
        assert parser.parse_args(['-rescan']).rescan is True

    def test_flag_with_explicit_value(self, parser):
        args = parser.parse_args(['-rescan=0', '--walletbroadcast=1'])
        assert args.rescan is False
        assert args.walletbroadcast is True

    def test_repeated_wallet_keeps_order(self, parser):
        args = parser.parse_args(['-wallet', 'w1', '-wallet=w2', '--wallet', 'w3'])
        assert args.wallet == ['w1', 'w2', 'w3']

    def test_wallet_names_do_not_clash_with_longer_options(self, parser):
        args = parser.parse_args(['-walletdir', '/srv/wallets', '-wallet', 'w1'])
        assert args.walletdir == '/srv/wallets'
        assert args.wallet == ['w1']

    def test_bare_zapwallettxes_is_mode_one(self, parser):
        assert parser.parse_args(['-zapwallettxes']).zapwallettxes == 1
        assert parser.parse_args(['-zapwallettxes=2']).zapwallettxes == 2

    def test_zapwallettxes_mode_out_of_range(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['-zapwallettxes=3'])

    def test_amounts_are_decimal(self, parser):
        assert parser.parse_args(['-minrelaytxfee=0.0002']).minrelaytxfee == Decimal("0.0002")

    def test_negative_amount_rejected(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['-minrelaytxfee=-1'])

    def test_options_from_args_keeps_only_given_values(self, parser):
        args = parser.parse_args(['-wallet', 'w1', '-prune', '550', '-sysperms=0'])
        assert options_from_args(args) == {'wallet': ['w1'], 'prune': 550, 'sysperms': False}


class TestParseBool:

    @pytest.mark.parametrize("text,expected", [
        ("1", True), ("true", True), ("YES", True), ("0", False), ("off", False),
    ])
    def test_accepted_spellings(self, text, expected):
        assert parse_bool(text) is expected

    def test_rejects_garbage(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_bool("maybe")
