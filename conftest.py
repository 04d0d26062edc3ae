import os
import sys
from pathlib import Path

# Make ``config`` and ``orders_api`` importable without installation
sys.path.insert(0, str(Path(__file__).resolve().parent))

os.environ.setdefault("ORDER_API_URL", "http://orders.test/api/pos/orders")
os.environ.setdefault("LOG_LEVEL", "INFO")
