class WalletInitError(Exception):
    """Base exception for wallet startup and shutdown errors"""
    pass

class ConfigurationError(WalletInitError):
    """Incompatible option combination"""
    pass

class WalletDirError(WalletInitError):
    """Invalid -walletdir setting"""
    pass

class DuplicateWalletError(WalletInitError):
    """Two wallet identifiers resolve to the same location"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Error loading wallet {identifier}. Duplicate -wallet filename specified.")

class WalletClosedError(WalletInitError):
    """Write to a wallet whose storage was already released by a hard flush"""
    pass

class LifecycleStateError(WalletInitError):
    """Lifecycle step requested from the wrong state"""
    pass
