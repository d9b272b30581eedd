"""Constants and default values for the dashboard."""
from typing import Dict, List, Tuple

# Source id reported for sample data
MOCK_SOURCE = "mock"

# Reference assets for sample data:
# (id, symbol, name, image, base_price, market_cap, rank, base_change, total_volume)
REFERENCE_ASSETS: List[Tuple[str, str, str, str, float, float, int, float, float]] = [
    ("bitcoin", "btc", "Bitcoin",
     "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
     65432.12, 1278654321098, 1, 2.35, 32456789012),
    ("ethereum", "eth", "Ethereum",
     "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
     3456.78, 415678901234, 2, -1.23, 18765432109),
    ("tether", "usdt", "Tether",
     "https://assets.coingecko.com/coins/images/325/large/Tether.png",
     1.0, 98765432100, 3, 0.01, 65432109876),
    ("binancecoin", "bnb", "BNB",
     "https://assets.coingecko.com/coins/images/825/large/bnb-icon2_2x.png",
     567.89, 87654321098, 4, 1.45, 2345678901),
    ("solana", "sol", "Solana",
     "https://assets.coingecko.com/coins/images/4128/large/solana.png",
     123.45, 54321098765, 5, 5.67, 3456789012),
]

# Sample data price jitter (fraction of base price)
PRICE_JITTER = 0.01
STABLE_PRICE_JITTER = 0.001
STABLE_ASSETS = {"tether"}
CHANGE_JITTER = 0.3  # Scaled by (factor - 0.5), so at most +/-15% of the base change

# Table columns: (column id, header)
TABLE_COLUMNS: List[Tuple[str, str]] = [
    ("market_cap_rank", "#"),
    ("name", "Name"),
    ("symbol", "Symbol"),
    ("current_price", "Price"),
    ("price_change_percentage_24h", "24h Change"),
    ("market_cap", "Market Cap"),
    ("total_volume", "Volume (24h)"),
]

# Notice variants
NOTICE_DEFAULT = "default"
NOTICE_DESTRUCTIVE = "destructive"

NOTICE_COLORS: Dict[str, str] = {
    NOTICE_DEFAULT: "#2c3e50",
    NOTICE_DESTRUCTIVE: "#dc3545",
}
