"""Points the service at throwaway settings before anything imports it."""

import os

os.environ.setdefault("STOCK_DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
