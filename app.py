#!/usr/bin/env python3
"""
Flask entry point for Mindful Chat Service.

Uses environment variables (or a local .env file) for configuration.
"""
import os
import sys
import logging
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

from mindful_chat.api import create_app

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
