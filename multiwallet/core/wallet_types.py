# multiwallet/core/wallet_types.py
from enum import Enum, auto
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from multiwallet.core.config import ConfigSnapshot

class LifecycleState(Enum):
    """States of the wallet set during one node run"""
    UNVALIDATED = auto()
    VERIFIED = auto()
    LOADED = auto()
    RUNNING = auto()
    FLUSHING = auto()
    STOPPED = auto()
    UNLOADED = auto()

@dataclass(frozen=True)
class WalletLocation:
    """Resolved on-disk location of a wallet.

    Two locations are the same wallet iff their paths are equal; the
    identifier the user typed is carried along for messages only.
    """
    path: Path
    name: str = field(default="", compare=False)

    @property
    def display_name(self) -> str:
        return self.name if self.name else "[default wallet]"

    def exists(self) -> bool:
        return self.path.exists()

    def __str__(self) -> str:
        return str(self.path)

@dataclass
class VerifyResult:
    """Outcome of a wallet capability verification call"""
    ok: bool
    error: Optional[str] = None
    warning: Optional[str] = None

@dataclass
class ValidationResult:
    """Outcome of startup parameter interaction"""
    ok: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    infos: List[str] = field(default_factory=list)
    config: Optional[ConfigSnapshot] = None

@dataclass
class VerificationReport:
    """Outcome of verifying the whole configured wallet set"""
    ok: bool
    locations: List[WalletLocation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
