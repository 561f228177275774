# multiwallet/init/parameter_interaction.py
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Optional

from multiwallet.core.config import ConfigSnapshot, HIGH_TX_FEE_PER_KB, OptionOrigin
from multiwallet.core.wallet_types import ValidationResult

PRUNED_RESCAN_ERROR = (
    "Rescans are not possible in pruned mode. You will need to use -reindex "
    "which will download the whole blockchain again."
)
SYSPERMS_ERROR = "-sysperms is not allowed in combination with enabled wallet functionality"


def single_wallet_error(option: str) -> str:
    return f"-{option} is only allowed with a single wallet file"


def _fmt(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


class ConfigValidator:
    """Validate wallet option compatibility before any wallet I/O.

    The validator never touches a shared store: automatic overrides are
    applied to a copy of the snapshot which is handed back in the result.
    """

    def __init__(self, config: ConfigSnapshot):
        self.config = config
        self.infos: List[str] = []
        self.warnings: List[str] = []
        self.is_multiwallet = len(config.get_list("wallet")) > 1

    @classmethod
    def validate(cls, config: ConfigSnapshot) -> ValidationResult:
        return cls(config).run()

    def run(self) -> ValidationResult:
        if self.config.get_bool("disablewallet"):
            for wallet in self.config.get_list("wallet"):
                self.infos.append(f"parameter interaction: -disablewallet -> ignoring -wallet={wallet}")
            return ValidationResult(ok=True, infos=self.infos, config=self.config)

        rules: List[Callable[[], Optional[str]]] = [
            self._check_single_wallet_options,
            self._apply_blocksonly,
            self._apply_salvage,
            self._apply_zap,
            self._check_sysperms,
            self._check_pruned_rescan,
        ]

        error = None
        for rule in rules:
            error = rule()
            if error:
                break

        fee_error = self._check_min_relay_fee()
        if error is None:
            error = fee_error

        return ValidationResult(
            ok=error is None,
            errors=[error] if error else [],
            warnings=self.warnings,
            infos=self.infos,
            config=self.config
        )

    def _soft_set(self, name: str, value: Any, reason: str) -> None:
        self.config, applied = self.config.soft_set(name, value)
        if applied:
            self.infos.append(f"parameter interaction: {reason} -> setting -{name}={_fmt(value)}")
        else:
            kept = _fmt(self.config.get(name))
            if self.config.origin(name) == OptionOrigin.USER:
                self.infos.append(f"parameter interaction: {reason} -> keeping explicit -{name}={kept}")
            else:
                self.infos.append(f"parameter interaction: {reason} -> -{name}={kept} already set")

    def _check_single_wallet_options(self) -> Optional[str]:
        if not self.is_multiwallet:
            return None
        for option in ("salvagewallet", "upgradewallet"):
            if self.config.get_bool(option):
                return single_wallet_error(option)
        return None

    def _apply_blocksonly(self) -> Optional[str]:
        if self.config.get_bool("blocksonly"):
            self._soft_set("walletbroadcast", False, "-blocksonly=1")
        return None

    def _apply_salvage(self) -> Optional[str]:
        if self.config.get_bool("salvagewallet"):
            # Only keys survive a salvage, so transactions have to be rescanned
            self._soft_set("rescan", True, "-salvagewallet=1")
        return None

    def _apply_zap(self) -> Optional[str]:
        mode = self.config.get_int("zapwallettxes")
        if not mode:
            return None
        # Zapped transactions must not come back from a persisted mempool
        self._soft_set("persistmempool", False, "-zapwallettxes enabled")
        if self.is_multiwallet:
            return single_wallet_error("zapwallettxes")
        self._soft_set("rescan", True, "-zapwallettxes enabled")
        return None

    def _check_sysperms(self) -> Optional[str]:
        if self.config.get_bool("sysperms"):
            return SYSPERMS_ERROR
        return None

    def _check_pruned_rescan(self) -> Optional[str]:
        if self.config.get_int("prune") > 0 and self.config.get_bool("rescan"):
            return PRUNED_RESCAN_ERROR
        return None

    def _check_min_relay_fee(self) -> Optional[str]:
        raw = self.config.get("minrelaytxfee")
        try:
            fee = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return f"Invalid amount for -minrelaytxfee=<amount>: '{raw}'"
        if fee < 0:
            return f"Invalid amount for -minrelaytxfee=<amount>: '{raw}'"
        if fee > HIGH_TX_FEE_PER_KB:
            self.warnings.append(
                "-minrelaytxfee is set very high! "
                "The wallet will avoid paying less than the minimum relay fee."
            )
        return None


def validate(config: ConfigSnapshot) -> ValidationResult:
    """Run wallet parameter interaction over ``config``"""
    return ConfigValidator.validate(config)
