#multiwallet/core/config.py
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

# Option defaults for everything the wallet layer reads
DEFAULT_DISABLE_WALLET = False
DEFAULT_WALLETBROADCAST = True
DEFAULT_FLUSHWALLET = True
DEFAULT_BLOCKSONLY = False
DEFAULT_PERSIST_MEMPOOL = True
DEFAULT_MIN_RELAY_TX_FEE = Decimal("0.00001")
# Coin per kB above which a fee setting is considered absurd
HIGH_TX_FEE_PER_KB = Decimal("0.01")

DEFAULT_WALLET_FILENAME = "wallet.dat"
PEERS_SENTINEL_FILENAME = "peers.dat"

OPTION_DEFAULTS: Dict[str, Any] = {
    "disablewallet": DEFAULT_DISABLE_WALLET,
    "wallet": (),
    "walletdir": None,
    "salvagewallet": False,
    "zapwallettxes": 0,
    "rescan": False,
    "prune": 0,
    "blocksonly": DEFAULT_BLOCKSONLY,
    "walletbroadcast": DEFAULT_WALLETBROADCAST,
    "upgradewallet": False,
    "sysperms": False,
    "minrelaytxfee": DEFAULT_MIN_RELAY_TX_FEE,
    "persistmempool": DEFAULT_PERSIST_MEMPOOL,
    "flushwallet": DEFAULT_FLUSHWALLET,
    "datadir": None,
    "legacydatadir": None,
}


class OptionOrigin(Enum):
    """Where an option value came from"""
    UNSET = auto()
    USER = auto()
    AUTO = auto()


@dataclass(frozen=True)
class OptionValue:
    value: Any
    origin: OptionOrigin = OptionOrigin.USER


_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"Not a boolean value: {value!r}")
    return bool(value)


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable view of node options for one startup pass.

    Every mutator returns a new snapshot so that validation can hand a
    transformed configuration back to the caller instead of touching a
    shared store. Options never given by the user report ``UNSET`` and
    fall back to ``OPTION_DEFAULTS``.
    """
    _values: Mapping[str, OptionValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "_values", MappingProxyType(dict(self._values)))

    @classmethod
    def from_user(cls, options: Optional[Mapping[str, Any]] = None) -> "ConfigSnapshot":
        """Build a snapshot where every given option counts as explicitly set"""
        values = {}
        for name, value in (options or {}).items():
            if value is None:
                continue
            if name == "wallet" and isinstance(value, str):
                value = (value,)
            elif name == "wallet":
                value = tuple(value)
            values[name] = OptionValue(value, OptionOrigin.USER)
        return cls(values)

    def origin(self, name: str) -> OptionOrigin:
        option = self._values.get(name)
        return option.origin if option else OptionOrigin.UNSET

    def is_set(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        option = self._values.get(name)
        if option is not None:
            return option.value
        if default is not None:
            return default
        return OPTION_DEFAULTS.get(name)

    def get_bool(self, name: str, default: Optional[bool] = None) -> bool:
        return _to_bool(self.get(name, default))

    def get_int(self, name: str, default: Optional[int] = None) -> int:
        value = self.get(name, default)
        if isinstance(value, bool):
            return int(value)
        return int(value or 0)

    def get_decimal(self, name: str) -> Decimal:
        return Decimal(str(self.get(name)))

    def get_list(self, name: str) -> List[str]:
        value = self.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    def force_set(self, name: str, value: Any, origin: OptionOrigin = OptionOrigin.AUTO) -> "ConfigSnapshot":
        values = dict(self._values)
        if name == "wallet" and not isinstance(value, str):
            value = tuple(value)
        values[name] = OptionValue(value, origin)
        return ConfigSnapshot(values)

    def soft_set(self, name: str, value: Any) -> Tuple["ConfigSnapshot", bool]:
        """Set ``name`` only when nobody has set it yet.

        Returns the resulting snapshot and whether the value was applied.
        """
        if self.is_set(name):
            return self, False
        return self.force_set(name, value, OptionOrigin.AUTO), True

    def items(self) -> Iterator[Tuple[str, OptionValue]]:
        return iter(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        """Effective values for every known option"""
        result = {name: self.get(name) for name in OPTION_DEFAULTS}
        for name, option in self._values.items():
            result[name] = option.value
        return result
