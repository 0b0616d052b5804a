from dataclasses import dataclass

from algosdk.encoding import decode_address, encode_address
from tinyman.utils import bytes_to_int, int_to_bytes

from firststage.constants import *
from firststage.exceptions import TruncatedRecord


ASSET_RECORD_ADDRESS_FIELDS = (
    ("admin_account", ADMIN_ACCOUNT_OFFSET),
    ("main_pool", MAIN_POOL_OFFSET),
    ("liquidity_target", LIQUIDITY_TARGET_OFFSET),
)

ASSET_RECORD_UINT_FIELDS = (
    ("project_tax_bps", PROJECT_TAX_BPS_OFFSET),
    ("burn_tax_bps", BURN_TAX_BPS_OFFSET),
    ("reflection_tax_bps", REFLECTION_TAX_BPS_OFFSET),
    ("freeze_tax_bps", FREEZE_TAX_BPS_OFFSET),
    ("liquidity_tax_bps", LIQUIDITY_TAX_BPS_OFFSET),
    ("freeze_reward_bps", FREEZE_REWARD_BPS_OFFSET),
    ("max_freeze_reward", MAX_FREEZE_REWARD_OFFSET),
    ("liquidity_deposit_bps", LIQUIDITY_DEPOSIT_BPS_OFFSET),
    ("eligible_for_reflections_total", ELIGIBLE_FOR_REFLECTIONS_TOTAL_OFFSET),
    ("freeze_rewards_available", FREEZE_REWARDS_AVAILABLE_OFFSET),
    ("reflections_tokens_available", REFLECTIONS_TOKENS_AVAILABLE_OFFSET),
    ("reflections_algo_available", REFLECTIONS_ALGO_AVAILABLE_OFFSET),
    ("minimum_reflections", MINIMUM_REFLECTIONS_OFFSET),
    ("tokens_collected", TOKENS_COLLECTED_OFFSET),
    ("algo_collected", ALGO_COLLECTED_OFFSET),
    ("pending_project_tax", PENDING_PROJECT_TAX_OFFSET),
    ("pending_liquidity_tax", PENDING_LIQUIDITY_TAX_OFFSET),
)

USER_DEPOSIT_RECORD_UINT_FIELDS = (
    ("locked_asset_id", LOCKED_ASSET_ID_OFFSET),
    ("lp_deposit", LP_DEPOSIT_OFFSET),
    ("locked_lp_tokens", LOCKED_LP_TOKENS_OFFSET),
    ("lp_app_id", LP_APP_ID_OFFSET),
    ("second_locked_asset_id", SECOND_LOCKED_ASSET_ID_OFFSET),
    ("second_lp_deposit", SECOND_LP_DEPOSIT_OFFSET),
)


def read_uint64(data: bytes, offset: int) -> int:
    return bytes_to_int(data[offset:offset + 8])


def decode_flags(flags: int):
    """
    Returns (buy_tax, sell_tax, taxes_in_native_currency) from the packed flags byte.
    """
    return (
        bool(flags & BUY_TAX_FLAG),
        bool(flags & SELL_TAX_FLAG),
        bool(flags & TAXES_IN_NATIVE_CURRENCY_FLAG),
    )


def encode_flags(buy_tax: bool, sell_tax: bool, taxes_in_native_currency: bool) -> int:
    flags = 0
    if buy_tax:
        flags |= BUY_TAX_FLAG
    if sell_tax:
        flags |= SELL_TAX_FLAG
    if taxes_in_native_currency:
        flags |= TAXES_IN_NATIVE_CURRENCY_FLAG
    return flags


@dataclass
class AssetRecord:
    admin_account: str
    main_pool: str
    liquidity_target: str
    project_tax_bps: int = 0
    burn_tax_bps: int = 0
    reflection_tax_bps: int = 0
    freeze_tax_bps: int = 0
    liquidity_tax_bps: int = 0
    freeze_reward_bps: int = 0
    max_freeze_reward: int = 0
    liquidity_deposit_bps: int = 0
    eligible_for_reflections_total: int = 0
    freeze_rewards_available: int = 0
    reflections_tokens_available: int = 0
    reflections_algo_available: int = 0
    minimum_reflections: int = 0
    tokens_collected: int = 0
    algo_collected: int = 0
    pending_project_tax: int = 0
    pending_liquidity_tax: int = 0
    buy_tax: bool = False
    sell_tax: bool = False
    taxes_in_native_currency: bool = False

    @property
    def total_tax_bps(self) -> int:
        return (
            self.project_tax_bps
            + self.burn_tax_bps
            + self.reflection_tax_bps
            + self.freeze_tax_bps
            + self.liquidity_tax_bps
        )

    @property
    def is_taxed(self) -> bool:
        return self.buy_tax or self.sell_tax

    @classmethod
    def from_bytes(cls, data: bytes):
        """
        Decodes the asset box. Values are passed through as stored; a total tax rate above
        10000 bps is not rejected here.
        """
        if len(data) < ASSET_RECORD_MIN_LENGTH:
            raise TruncatedRecord("AssetRecord", ASSET_RECORD_MIN_LENGTH, len(data))

        fields = {}
        for name, offset in ASSET_RECORD_ADDRESS_FIELDS:
            fields[name] = encode_address(bytes(data[offset:offset + 32]))
        for name, offset in ASSET_RECORD_UINT_FIELDS:
            fields[name] = read_uint64(data, offset)
        fields["buy_tax"], fields["sell_tax"], fields["taxes_in_native_currency"] = decode_flags(data[FLAGS_OFFSET])
        return cls(**fields)

    def to_bytes(self) -> bytes:
        data = bytearray(ASSET_RECORD_SIZE)
        for name, offset in ASSET_RECORD_ADDRESS_FIELDS:
            data[offset:offset + 32] = decode_address(getattr(self, name))
        for name, offset in ASSET_RECORD_UINT_FIELDS:
            data[offset:offset + 8] = int_to_bytes(getattr(self, name))
        data[FLAGS_OFFSET] = encode_flags(self.buy_tax, self.sell_tax, self.taxes_in_native_currency)
        return bytes(data)


@dataclass
class UserDepositRecord:
    locked_asset_id: int = 0
    lp_deposit: int = 0
    locked_lp_tokens: int = 0
    lp_app_id: int = 0
    second_locked_asset_id: int = 0
    second_lp_deposit: int = 0

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) < USER_DEPOSIT_RECORD_MIN_LENGTH:
            raise TruncatedRecord("UserDepositRecord", USER_DEPOSIT_RECORD_MIN_LENGTH, len(data))

        return cls(**{name: read_uint64(data, offset) for name, offset in USER_DEPOSIT_RECORD_UINT_FIELDS})

    def to_bytes(self) -> bytes:
        data = bytearray(USER_DEPOSIT_RECORD_MIN_LENGTH)
        for name, offset in USER_DEPOSIT_RECORD_UINT_FIELDS:
            data[offset:offset + 8] = int_to_bytes(getattr(self, name))
        return bytes(data)


def decode_asset_record(data: bytes) -> AssetRecord:
    return AssetRecord.from_bytes(data)


def decode_user_deposit_record(data: bytes) -> UserDepositRecord:
    return UserDepositRecord.from_bytes(data)
