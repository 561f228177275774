from .file_wallet import FileWallet, FileWalletCapability

__all__ = [
    'FileWallet',
    'FileWalletCapability'
]
