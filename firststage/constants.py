FIRST_STAGE_MAINNET_APP_ID = 3158291365
TM_APP_ID = 1002541853

BONFIRE_WALLET = "BNFIREKGRXEHCFOEQLTX3PU5SUCMRKDU7WHNBGZA4SXPW42OAHZBP7BPHY"
DEPLOYER_WALLET = "FJHGNHTMRSQCISPDN2N6FTFKXM64S2X52M6BYONH7ZMON3SPRUZTSAHV54"

ALGOD_MAINNET_ADDRESS = "https://mainnet-api.algonode.cloud"

MAX_UINT64 = 18446744073709551615
MIN_TXN_FEE = 1000

# Box prefixes
ASSET_BOX_PREFIX = b"a"
GENERAL_EXEMPT_PREFIX = b"g"
REFERRAL_EXEMPT_PREFIX = b"r"

# Asset box layout
ASSET_RECORD_SIZE = 256
ASSET_RECORD_MIN_LENGTH = 249

ADMIN_ACCOUNT_OFFSET = 0
MAIN_POOL_OFFSET = 32
PROJECT_TAX_BPS_OFFSET = 64
BURN_TAX_BPS_OFFSET = 72
REFLECTION_TAX_BPS_OFFSET = 80
FREEZE_TAX_BPS_OFFSET = 88
LIQUIDITY_TAX_BPS_OFFSET = 96
LIQUIDITY_TARGET_OFFSET = 104
FREEZE_REWARD_BPS_OFFSET = 136
MAX_FREEZE_REWARD_OFFSET = 144
LIQUIDITY_DEPOSIT_BPS_OFFSET = 152
ELIGIBLE_FOR_REFLECTIONS_TOTAL_OFFSET = 176
FREEZE_REWARDS_AVAILABLE_OFFSET = 184
REFLECTIONS_TOKENS_AVAILABLE_OFFSET = 192
REFLECTIONS_ALGO_AVAILABLE_OFFSET = 200
MINIMUM_REFLECTIONS_OFFSET = 208
TOKENS_COLLECTED_OFFSET = 216
ALGO_COLLECTED_OFFSET = 224
PENDING_PROJECT_TAX_OFFSET = 232
PENDING_LIQUIDITY_TAX_OFFSET = 240
FLAGS_OFFSET = 248

BUY_TAX_FLAG = 0b10000000
SELL_TAX_FLAG = 0b01000000
TAXES_IN_NATIVE_CURRENCY_FLAG = 0b00100000

# User deposit box layout
USER_DEPOSIT_RECORD_MIN_LENGTH = 48

LOCKED_ASSET_ID_OFFSET = 0
LP_DEPOSIT_OFFSET = 8
LOCKED_LP_TOKENS_OFFSET = 16
LP_APP_ID_OFFSET = 24
SECOND_LOCKED_ASSET_ID_OFFSET = 32
SECOND_LP_DEPOSIT_OFFSET = 40

# Tax
BPS_DENOMINATOR = 10_000
RESERVED_TXNS_PER_TAXED_ASSET = 3
DEFAULT_MAX_GROUP_SIZE = 16

# Fees and funding (microAlgos)
USER_BOX_MIN_BALANCE = 37_700
FREEZE_EXTRA_FEE = 2_000
OPERATIONS_TOP_EXTRA_FEE = 1_000
OPERATIONS_BOTTOM_EXTRA_FEE = 11_000

OPERATIONS_TOP_FLAG = 1
OPERATIONS_BOTTOM_FLAG = 2
