# multiwallet/init/options.py
import argparse
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from multiwallet.core.config import (
    DEFAULT_DISABLE_WALLET, DEFAULT_FLUSHWALLET, DEFAULT_MIN_RELAY_TX_FEE, DEFAULT_WALLETBROADCAST
)

def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")

def parse_amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if amount < 0:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount

def _flag(parser, name: str, help_text: str):
    # -name, -name=1 and -name=0 all work; absent stays None so it counts as unset
    parser.add_argument(f'-{name}', f'--{name}', dest=name, nargs='?', const=True,
                        default=None, type=parse_bool, help=help_text)

def add_wallet_options(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register wallet options, and the node options they interact with"""
    wallet = parser.add_argument_group('Wallet options')
    wallet.add_argument('-wallet', '--wallet', dest='wallet', action='append', default=None, metavar='PATH',
                        help="Specify wallet database path. Can be specified multiple times to load "
                             "multiple wallets. Path is interpreted relative to <walletdir> if it is not "
                             "absolute, and will be created if it does not exist (as a directory "
                             "containing a wallet.dat file). Names of existing data files in "
                             "<walletdir> are also accepted.")
    wallet.add_argument('-walletdir', '--walletdir', dest='walletdir', default=None, metavar='DIR',
                        help="Specify directory to hold wallets (default: <datadir>/wallets if it "
                             "exists, otherwise <datadir>)")
    _flag(wallet, 'disablewallet',
          f"Do not load the wallet (default: {int(DEFAULT_DISABLE_WALLET)})")
    _flag(wallet, 'salvagewallet', "Attempt to recover private keys from a corrupt wallet on startup")
    wallet.add_argument('-zapwallettxes', '--zapwallettxes', dest='zapwallettxes', nargs='?', const=1,
                        default=None, type=int, choices=[0, 1, 2], metavar='MODE',
                        help="Delete all wallet transactions and only recover those parts of the "
                             "blockchain through -rescan on startup (1 = keep tx meta data, "
                             "2 = drop tx meta data)")
    _flag(wallet, 'rescan', "Rescan the block chain for missing wallet transactions on startup")
    _flag(wallet, 'upgradewallet', "Upgrade wallet to latest format on startup")
    _flag(wallet, 'walletbroadcast',
          f"Make the wallet broadcast transactions (default: {int(DEFAULT_WALLETBROADCAST)})")
    _flag(wallet, 'flushwallet',
          f"Run a thread to flush wallet periodically (default: {int(DEFAULT_FLUSHWALLET)})")

    node = parser.add_argument_group('Node options')
    node.add_argument('-datadir', '--datadir', dest='datadir', default=None, metavar='DIR',
                      help="Specify data directory")
    node.add_argument('-legacydatadir', '--legacydatadir', dest='legacydatadir', default=None, metavar='DIR',
                      help="Data directory of the previous client generation to migrate wallet.dat from")
    _flag(node, 'blocksonly', "Only download and relay blocks, not loose transactions")
    _flag(node, 'sysperms', "Create new files with system default permissions")
    _flag(node, 'persistmempool', "Whether to save the mempool on shutdown and load on restart")
    node.add_argument('-prune', '--prune', dest='prune', default=None, type=int, metavar='N',
                      help="Reduce storage requirements by pruning old blocks (0 = disable)")
    node.add_argument('-minrelaytxfee', '--minrelaytxfee', dest='minrelaytxfee', default=None,
                      type=parse_amount, metavar='AMT',
                      help=f"Fees (per kB) smaller than this are considered zero fee for relaying "
                           f"(default: {DEFAULT_MIN_RELAY_TX_FEE})")
    return parser

WALLET_OPTION_NAMES = (
    'wallet', 'walletdir', 'disablewallet', 'salvagewallet', 'zapwallettxes', 'rescan',
    'upgradewallet', 'walletbroadcast', 'flushwallet', 'datadir', 'legacydatadir',
    'blocksonly', 'sysperms', 'persistmempool', 'prune', 'minrelaytxfee',
)

def options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Options the user actually passed on the command line"""
    options = {}
    for name in WALLET_OPTION_NAMES:
        value = getattr(args, name, None)
        if value is not None:
            options[name] = value
    return options
