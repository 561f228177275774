#!/usr/bin/env python3
"""
Multiwallet daemon

Loads the configured wallets, keeps them maintained while running and
unloads them cleanly on SIGINT/SIGTERM.
"""

import argparse
import signal
import sys
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from multiwallet.config.config_manager import ConfigManager
from multiwallet.core.exceptions import ConfigurationError
from multiwallet.core.interfaces import WalletCapability
from multiwallet.init.lifecycle import WalletLifecycle
from multiwallet.init.options import add_wallet_options, options_from_args
from multiwallet.storage.file_wallet import FileWalletCapability
from multiwallet.tasks.scheduler import ThreadScheduler
from multiwallet.utils.logging import configure_logging
from multiwallet.utils.pidfile import remove_pid_file, setup_pid_file

logger = logging.getLogger("multiwallet.daemon")

@dataclass
class DaemonConfig:
    """Daemon configuration container"""
    config_path: Optional[str] = None
    log_level: Optional[str] = None
    log_file: Optional[str] = None
    pid_file: Optional[str] = None

class SignalHandler:
    """Turn SIGINT/SIGTERM into a shutdown request"""

    def __init__(self, daemon: 'MultiwalletDaemon'):
        self.daemon = daemon
        self.original_handlers = {}

    def setup_handlers(self):
        for sig in (signal.SIGINT, signal.SIGTERM):
            self.original_handlers[sig] = signal.getsignal(sig)
            signal.signal(sig, self._signal_handler)

    def restore_handlers(self):
        for sig, handler in self.original_handlers.items():
            if handler is not None:
                signal.signal(sig, handler)

    def _signal_handler(self, signum, frame):
        if self.daemon.shutdown_event.is_set():
            logger.warning(f"Signal {signum} received during shutdown - forcing exit")
            sys.exit(1)
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        self.daemon.shutdown_event.set()

class MultiwalletDaemon:
    """Owns the scheduler and the wallet lifecycle for one process run"""

    def __init__(self, config_manager: ConfigManager, capability: Optional[WalletCapability] = None):
        self.config_manager = config_manager
        self.capability = capability or FileWalletCapability()
        self.scheduler = ThreadScheduler()
        self.lifecycle: Optional[WalletLifecycle] = None
        self.shutdown_event = threading.Event()

    def start(self) -> bool:
        self.lifecycle = WalletLifecycle(self.config_manager.snapshot(), self.capability)
        self.scheduler.start()
        if not self.lifecycle.initialize(self.scheduler):
            for error in self.lifecycle.errors:
                print(f"Error: {error}", file=sys.stderr)
            self.scheduler.stop()
            return False
        logger.info(f"Started with {len(self.lifecycle.registry)} wallet(s)")
        return True

    def wait(self):
        self.shutdown_event.wait()

    def stop(self):
        # Maintenance must not race the final flush
        self.scheduler.stop()
        if self.lifecycle:
            self.lifecycle.shutdown()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Multiwallet daemon")
    parser.add_argument('--config', help='Path to YAML, JSON or TOML configuration file')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (overrides config file)')
    parser.add_argument('--log-file', help='Rotating log file (overrides config file)')
    parser.add_argument('--pid-file', help='Write the daemon PID to this file')
    add_wallet_options(parser)
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    daemon_config = DaemonConfig(
        config_path=args.config,
        log_level=args.log_level,
        log_file=args.log_file,
        pid_file=args.pid_file
    )

    try:
        config_manager = ConfigManager(daemon_config.config_path)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    config_manager.apply_cli_options(options_from_args(args))

    configure_logging(
        level=daemon_config.log_level or config_manager.get('logging.level', 'INFO'),
        log_file=daemon_config.log_file or config_manager.get('logging.file'),
        max_bytes=config_manager.get('logging.max_size'),
        backup_count=config_manager.get('logging.backup_count')
    )

    if daemon_config.pid_file:
        try:
            setup_pid_file(daemon_config.pid_file)
        except RuntimeError as e:
            logger.error(str(e))
            return 1

    daemon = MultiwalletDaemon(config_manager)
    signal_handler = SignalHandler(daemon)
    signal_handler.setup_handlers()

    try:
        if not daemon.start():
            return 1
        daemon.wait()
        return 0
    finally:
        daemon.stop()
        signal_handler.restore_handlers()
        if daemon_config.pid_file:
            remove_pid_file(daemon_config.pid_file)

if __name__ == "__main__":
    sys.exit(main())
