# agent_plugins/chains.py
# Purpose: Chain tables for the token-trending plugin.
#   - GOPLUS_CHAINS: GoPlus token_security chain ids -> display name
#   - DEFILLAMA_CHAINS: chain names accepted by yields.llama.fi (case-sensitive)

print("[CHAINS] module loaded")

GOPLUS_API_BASE = "https://api.gopluslabs.io/api/v1"

GOPLUS_CHAINS = {
    "1": "Ethereum",
    "56": "BSC",
    "42161": "Arbitrum",
    "137": "Polygon",
    "solana": "Solana",
    "204": "opBNB",
    "324": "zkSync Era",
    "59144": "Linea Mainnet",
    "8453": "Base",
    "5000": "Mantle",
    "534352": "Scroll",
    "10": "Optimism",
    "43114": "Avalanche",
    "250": "Fantom",
    "25": "Cronos",
    "128": "HECO",
    "100": "Gnosis",
    "tron": "Tron",
    "321": "KCC",
    "201022": "FON",
    "42766": "ZKFair",
    "81457": "Blast",
    "169": "Manta Pacific",
    "80085": "Berachain Artio Testnet",
    "4200": "Merlin",
    "200901": "Bitlayer Mainnet",
    "810180": "zkLink Nova",
    "196": "X Layer Mainnet",
    "48899": "Zircuit",
    "185": "Mint",
}

# Non-EVM ids use their own address formats (base58)
NON_EVM_CHAIN_IDS = {"solana", "tron"}

# Short names people actually type
_CHAIN_ALIASES = {
    "eth": "1",
    "mainnet": "1",
    "bnb": "56",
    "arb": "42161",
    "matic": "137",
    "sol": "solana",
    "op": "10",
    "avax": "43114",
    "ftm": "250",
    "zksync": "324",
    "linea": "59144",
}

MISSING_CHAIN_ID = "missing"

DEFILLAMA_CHAINS = [
    "Ethereum", "Solana", "Base", "BSC", "Arbitrum", "Hyperliquid", "Sui", "Tron",
    "Avalanche", "Polygon", "Optimism", "Thorchain", "PulseChain", "Mantle", "Aptos",
    "Dexalot", "Linea", "Blast", "Scroll", "Sei", "BOB", "Fantom", "ZKsync Era",
    "Gnosis", "Osmosis", "Kaia", "TON", "Near", "Starknet", "Cronos", "Hedera", "CORE",
    "Injective", "Ronin", "Cardano", "Algorand", "Metis", "Kava", "Chainflip",
    "WEMIX3.0", "Flare", "Fraxtal", "Stellar", "ApeChain", "Polygon zkEVM", "Eclipse",
    "IOTA EVM", "MultiversX", "Manta", "Hydration", "Rootstock", "Horizen EON", "ICP",
    "Fuel Ignition", "Radix", "Merlin", "Flow", "Mode", "Morph", "IoTeX", "Vana",
    "Neutron", "Cronos zkEVM", "Moonbeam", "Oraichain", "Icon", "Filecoin", "Lisk",
    "ZetaChain", "EOS", "Fuse", "Taiko", "smartBCH", "Heco", "Canto", "Aurora", "Celo",
    "Bitlayer", "re.al", "UNIT0", "EOS EVM", "Boba", "FunctionX", "Venom", "Telos",
    "Terra2", "Sora", "Massa", "opBNB", "Alephium", "Gravity", "Mint", "Wanchain",
    "KCC", "Sanko", "DefiChain", "Harmony", "GodwokenV1", "Rollux", "Stacks",
    "Tombchain", "Godwoken", "Rangers", "Energi", "Zilliqa", "KARURA", "Moonriver",
    "Persistence One", "ENULS", "Waves", "Tezos", "Taraxa", "Shido", "Astar", "X Layer",
    "Hydra", "Elastos", "Oasis Sapphire", "Carbon", "Astar zkEVM", "Meter", "Rari",
    "ShimmerEVM", "Arbitrum Nova", "VeChain", "Obyte", "Bitcoincash", "MAP Protocol",
    "Corn", "DeFiChain EVM", "EnergyWeb", "Endurance", "HeLa", "Oasys", "Wax",
    "ThunderCore", "VinuChain", "Reya Network", "Immutable zkEVM", "Neon",
    "ZKsync Lite", "Planq", "Zora", "Polkadex", "Kardia", "Bittorrent", "MEER",
    "Syscoin", "NEO", "OKTChain", "Terra Classic", "SXnetwork", "OntologyEVM", "Ultron",
    "Cube", "Omax", "Concordium", "Bitcoin", "Asset Chain",
]


def resolve_goplus_chain_id(raw) -> str:
    """
    Accepts a GoPlus id ("1", "solana"), a display name ("Ethereum", "bsc")
    or a short alias ("eth") and returns the GoPlus id.
    Raises ValueError when missing or unknown.
    """
    s = str(raw if raw is not None else "").strip()
    if not s or s.lower() == MISSING_CHAIN_ID:
        raise ValueError("❌ Chain ID is missing. Please provide a valid chain ID.")

    if s in GOPLUS_CHAINS:
        return s

    low = s.lower()
    if low in GOPLUS_CHAINS:
        return low
    if low in _CHAIN_ALIASES:
        return _CHAIN_ALIASES[low]
    for cid, name in GOPLUS_CHAINS.items():
        if name.lower() == low:
            return cid

    raise ValueError(f"❌ Unsupported chain ID: {s}. Supported: {', '.join(GOPLUS_CHAINS)}")


def is_evm_chain(chain_id: str) -> bool:
    return chain_id not in NON_EVM_CHAIN_IDS


def is_supported_pool_chain(chain: str) -> bool:
    return chain in DEFILLAMA_CHAINS


__all__ = [
    "GOPLUS_API_BASE", "GOPLUS_CHAINS", "NON_EVM_CHAIN_IDS", "MISSING_CHAIN_ID",
    "DEFILLAMA_CHAINS", "resolve_goplus_chain_id", "is_evm_chain", "is_supported_pool_chain",
]
