CHAIN_ID_ETHEREUM = 1
CHAIN_ID_BSC = 56
CHAIN_ID_BSC_TESTNET = 97
CHAIN_ID_POLYGON = 137
CHAIN_ID_BASE = 8453
CHAIN_ID_BASE_SEPOLIA = 84532
CHAIN_ID_ARBITRUM = 42161
CHAIN_ID_ARBITRUM_SEPOLIA = 421614

DEFAULT_CHAIN_ID = CHAIN_ID_BSC_TESTNET

CHAIN_CODE_TO_ID = {
    "bsc": CHAIN_ID_BSC,
    "bsc-testnet": CHAIN_ID_BSC_TESTNET,
    "arbitrum": CHAIN_ID_ARBITRUM,
    "arbitrum-one": CHAIN_ID_ARBITRUM,
    "arbitrum-sepolia": CHAIN_ID_ARBITRUM_SEPOLIA,
    "base": CHAIN_ID_BASE,
    "base-sepolia": CHAIN_ID_BASE_SEPOLIA,
}

CHAIN_ID_TO_CODE: dict[int, str] = {
    v: k for k, v in CHAIN_CODE_TO_ID.items() if k != "arbitrum-one"
}

SUPPORTED_CHAINS = [
    CHAIN_ID_BSC,
    CHAIN_ID_ARBITRUM,
    CHAIN_ID_BASE,
    CHAIN_ID_BSC_TESTNET,
    CHAIN_ID_ARBITRUM_SEPOLIA,
    CHAIN_ID_BASE_SEPOLIA,
]

TESTNET_CHAIN_IDS: set[int] = {
    CHAIN_ID_BSC_TESTNET,
    CHAIN_ID_ARBITRUM_SEPOLIA,
    CHAIN_ID_BASE_SEPOLIA,
}

POA_MIDDLEWARE_CHAIN_IDS: set[int] = {
    CHAIN_ID_BSC,
    CHAIN_ID_BSC_TESTNET,
}

PRE_EIP_1559_CHAIN_IDS: set[int] = {
    CHAIN_ID_BSC,
    CHAIN_ID_BSC_TESTNET,
}

CHAIN_NAMES: dict[int, str] = {
    CHAIN_ID_ETHEREUM: "Ethereum Mainnet",
    CHAIN_ID_BSC: "BNB Smart Chain (BSC)",
    CHAIN_ID_BSC_TESTNET: "BSC Testnet",
    CHAIN_ID_POLYGON: "Polygon",
    CHAIN_ID_ARBITRUM: "Arbitrum One",
    CHAIN_ID_ARBITRUM_SEPOLIA: "Arbitrum Sepolia",
    CHAIN_ID_BASE: "Base",
    CHAIN_ID_BASE_SEPOLIA: "Base Sepolia",
}

CHAIN_SHORT_NAMES: dict[int, str] = {
    CHAIN_ID_BSC: "BSC",
    CHAIN_ID_ARBITRUM: "ARB",
    CHAIN_ID_BASE: "BASE",
    CHAIN_ID_BSC_TESTNET: "BSC Test",
    CHAIN_ID_ARBITRUM_SEPOLIA: "ARB Sep",
    CHAIN_ID_BASE_SEPOLIA: "Base Sep",
}

# (symbol, name, decimals)
NATIVE_CURRENCIES: dict[int, tuple[str, str, int]] = {
    CHAIN_ID_BSC: ("BNB", "BNB", 18),
    CHAIN_ID_BSC_TESTNET: ("tBNB", "BNB", 18),
    CHAIN_ID_ARBITRUM: ("ETH", "Ether", 18),
    CHAIN_ID_ARBITRUM_SEPOLIA: ("ETH", "Arbitrum Sepolia Ether", 18),
    CHAIN_ID_BASE: ("ETH", "Ether", 18),
    CHAIN_ID_BASE_SEPOLIA: ("ETH", "Sepolia Ether", 18),
}

PUBLIC_RPC_URLS: dict[int, list[str]] = {
    CHAIN_ID_BSC: ["https://bsc-dataseed.bnbchain.org"],
    CHAIN_ID_BSC_TESTNET: ["https://data-seed-prebsc-1-s1.binance.org:8545"],
    CHAIN_ID_ARBITRUM: ["https://arb1.arbitrum.io/rpc"],
    CHAIN_ID_ARBITRUM_SEPOLIA: ["https://sepolia-rollup.arbitrum.io/rpc"],
    CHAIN_ID_BASE: ["https://mainnet.base.org"],
    CHAIN_ID_BASE_SEPOLIA: ["https://sepolia.base.org"],
}

CHAIN_EXPLORER_URLS: dict[int, str] = {
    CHAIN_ID_BSC: "https://bscscan.com",
    CHAIN_ID_BSC_TESTNET: "https://testnet.bscscan.com",
    CHAIN_ID_ARBITRUM: "https://arbiscan.io",
    CHAIN_ID_ARBITRUM_SEPOLIA: "https://sepolia.arbiscan.io",
    CHAIN_ID_BASE: "https://basescan.org",
    CHAIN_ID_BASE_SEPOLIA: "https://sepolia.basescan.org",
}
