# Minimal ABIs for the launchpad TokenFactory and BondingCurveAMM contracts.

# Older factories emit the pool address as a non-indexed trailing field.
LEGACY_TOKEN_CREATED_EVENT_ABI = {
    "anonymous": False,
    "name": "TokenCreated",
    "type": "event",
    "inputs": [
        {"indexed": True, "name": "tokenAddress", "type": "address"},
        {"indexed": True, "name": "creator", "type": "address"},
        {"indexed": False, "name": "name", "type": "string"},
        {"indexed": False, "name": "symbol", "type": "string"},
        {"indexed": False, "name": "totalSupply", "type": "uint256"},
        {"indexed": False, "name": "ammAddress", "type": "address"},
    ],
}

ENHANCED_TOKEN_CREATED_EVENT_ABI = {
    "anonymous": False,
    "name": "TokenCreated",
    "type": "event",
    "inputs": [
        {"indexed": True, "name": "tokenAddress", "type": "address"},
        {"indexed": True, "name": "ammAddress", "type": "address"},
        {"indexed": True, "name": "creator", "type": "address"},
        {"indexed": False, "name": "name", "type": "string"},
        {"indexed": False, "name": "symbol", "type": "string"},
        {"indexed": False, "name": "totalSupply", "type": "uint256"},
        {"indexed": False, "name": "timestamp", "type": "uint256"},
    ],
}

TOKEN_CONFIG_COMPONENTS = [
    {"name": "name", "type": "string"},
    {"name": "symbol", "type": "string"},
    {"name": "description", "type": "string"},
    {"name": "imageUrl", "type": "string"},
    {"name": "totalSupply", "type": "uint256"},
    {"name": "basePrice", "type": "uint256"},
    {"name": "slope", "type": "uint256"},
    {"name": "curveType", "type": "uint8"},
    {"name": "graduationThreshold", "type": "uint256"},
]

TOKEN_FACTORY_ABI = [
    {
        "name": "createToken",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "symbol", "type": "string"},
            {"name": "description", "type": "string"},
            {"name": "imageUrl", "type": "string"},
            {"name": "totalSupply", "type": "uint256"},
            {"name": "basePrice", "type": "uint256"},
            {"name": "slope", "type": "uint256"},
            {"name": "curveType", "type": "uint8"},
        ],
        "outputs": [
            {"name": "", "type": "address"},
            {"name": "", "type": "address"},
        ],
    },
    {
        "name": "getAllTokens",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address[]"}],
    },
    {
        "name": "getTokenConfig",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "tokenAddress", "type": "address"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": TOKEN_CONFIG_COMPONENTS,
            }
        ],
    },
    {
        "name": "getTokenAMM",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "tokenAddress", "type": "address"}],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "isKasPumpToken",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "tokenAddress", "type": "address"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "CREATION_FEE",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    ENHANCED_TOKEN_CREATED_EVENT_ABI,
]

BONDING_CURVE_AMM_ABI = [
    {
        "name": "buyTokens",
        "type": "function",
        "stateMutability": "payable",
        "inputs": [{"name": "minTokensOut", "type": "uint256"}],
        "outputs": [],
    },
    {
        "name": "sellTokens",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "tokenAmount", "type": "uint256"},
            {"name": "minNativeOut", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "name": "getCurrentPrice",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "getTradingInfo",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "currentSupply", "type": "uint256"},
            {"name": "currentPrice", "type": "uint256"},
            {"name": "totalVolume", "type": "uint256"},
            {"name": "graduation", "type": "uint256"},
            {"name": "isGraduated", "type": "bool"},
        ],
    },
    {
        "name": "calculateTokensOut",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "nativeIn", "type": "uint256"},
            {"name": "supply", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "calculateNativeOut",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokensIn", "type": "uint256"},
            {"name": "supply", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "getPriceImpact",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "amount", "type": "uint256"},
            {"name": "isBuy", "type": "bool"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "token",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "isGraduated",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool"}],
    },
]
