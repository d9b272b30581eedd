"""Configuration settings for the dashboard."""
import os
from pathlib import Path
from typing import Dict, List

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# API Configuration
VS_CURRENCY = "usd"
MARKET_LIMIT = int(os.getenv("MARKET_LIMIT", "20"))  # Coins per snapshot

API_ENDPOINTS: Dict[str, str] = {
    "coingecko": (
        "https://api.coingecko.com/api/v3/coins/markets"
        f"?vs_currency={VS_CURRENCY}&order=market_cap_desc&per_page={MARKET_LIMIT}"
        "&page=1&sparkline=false&price_change_percentage=24h"
    ),
    "coinpaprika": f"https://api.coinpaprika.com/v1/tickers?limit={MARKET_LIMIT}",
    "coinlore": f"https://api.coinlore.net/api/tickers/?limit={MARKET_LIMIT}",
    "coinranking": f"https://api.coinranking.com/v2/coins?limit={MARKET_LIMIT}",
}

# Icon service for sources that don't ship an image URL
COIN_ICON_URL = "https://coinicons-api.vercel.app/api/icon/{symbol}"

# CORS relays, tried in order. The empty prefix is the direct call and must stay first.
CORS_PROXIES: List[str] = [
    "",
    "https://api.allorigins.win/raw?url=",
    "https://corsproxy.io/?",
    "https://cors-anywhere.herokuapp.com/",
]

# Timeout Configuration (seconds)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "5"))
FETCH_DEADLINE = float(os.getenv("FETCH_DEADLINE", "20"))  # Soft deadline for one refresh

# Retry Configuration
DEFAULT_MAX_ATTEMPTS = 3
SOURCE_MAX_ATTEMPTS = int(os.getenv("SOURCE_MAX_ATTEMPTS", "2"))
RETRY_BASE_DELAY = 1.0  # Doubled per attempt
RETRY_JITTER = 1.0  # Upper bound of the random component
RETRY_MAX_DELAY = 10.0

# Cache Configuration
CACHE_DURATION = float(os.getenv("CACHE_DURATION", "60"))
HEALTH_RESET_AFTER = float(os.getenv("HEALTH_RESET_AFTER", "300"))  # Retry failed sources after this

# Auto-refresh Configuration
REFRESH_INTERVAL = 60  # Live data
FALLBACK_REFRESH_INTERVAL = 120  # Sample data
MAX_CONSECUTIVE_ERRORS = 3

# Logging Configuration
LOG_DIR = PROJECT_ROOT / "logs"
LOG_DIR.mkdir(exist_ok=True)

# Dash App Configuration
DASH_PORT = int(os.getenv("PORT", "8052"))  # Use PORT env var for cloud deployment
DASH_DEBUG = os.getenv("DASH_DEBUG", "False").lower() == "true"  # Disable debug in production
SEARCH_DEBOUNCE = True  # Only filter when the search box loses focus or Enter is pressed
