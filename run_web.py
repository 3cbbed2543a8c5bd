"""
CalcPad Web Widget Launcher
Simple script to start the web server
"""
import logging
import sys

import config

print(f"Starting {config.APP_NAME} Web Widget...")
print()

try:
    from api import app
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("\nMake sure you have installed the required dependencies:")
    print("  pip install -e .")
    sys.exit(1)

logging.basicConfig(level=config.LOG_LEVEL)
print(f"Open in a browser: http://{config.WEB_HOST}:{config.WEB_PORT}")
app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
