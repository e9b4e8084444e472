# Bonding-curve math makes estimates drift with supply between quote and inclusion.
GAS_BUFFER_MULTIPLIER = 1.2
SUGGESTED_PRIORITY_FEE_MULTIPLIER = 1.5
SUGGESTED_GAS_PRICE_MULTIPLIER = 1.5
MAX_BASE_FEE_GROWTH_MULTIPLIER = 2

# Advisory bound baked into quotes. Execution recomputes from the user's tolerance.
DEFAULT_QUOTE_SLIPPAGE_PERCENT = 0.5
DEFAULT_SLIPPAGE_TOLERANCE_PERCENT = 1.0
# Display-only gas fee attached to quotes, in native units.
DEFAULT_QUOTE_GAS_FEE = 0.001

DEFAULT_RPC_READ_TIMEOUT = 20.0
DEFAULT_TRANSACTION_TIMEOUT = 180
DEFAULT_RECEIPT_CONFIRMATIONS = 1
DEFAULT_QUOTE_DEBOUNCE_SECONDS = 0.4
DEFAULT_NETWORK_SWITCH_SETTLE_SECONDS = 1.0

DEFAULT_LOG_SCAN_CHUNK_SIZE = 5_000

TOKEN_DECIMALS = 18
NATIVE_DECIMALS = 18
BASIS_POINTS_PER_PERCENT = 100

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

CURVE_TYPE_LINEAR = "linear"
CURVE_TYPE_EXPONENTIAL = "exponential"
CURVE_TYPE_CODES = {CURVE_TYPE_LINEAR: 0, CURVE_TYPE_EXPONENTIAL: 1}

ROUTE_BONDING_CURVE = "bonding-curve"
ROUTE_AMM = "amm"
