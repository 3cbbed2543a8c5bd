"""
CalcPad
Main application entry point
"""
import tkinter as tk
import subprocess
import sys
import os
import atexit
import logging
import argparse
import config
from gui import CalculatorGUI

# Global variable to track the web widget process
web_process = None


def start_web_server():
    """Start the Flask web widget in a separate process"""
    global web_process
    try:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        api_path = os.path.join(script_dir, 'api.py')

        web_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
        print(f"Web widget started (PID: {web_process.pid})")
        print("="*60)
        print(f"Open in a browser: http://{config.WEB_HOST}:{config.WEB_PORT}")
        print("="*60)
    except OSError as e:
        print(f"Failed to start web widget: {e}")


def cleanup_web_server():
    """Terminate the web widget when the main application exits"""
    global web_process
    if web_process:
        try:
            web_process.terminate()
            web_process.wait(timeout=5)
            print("Web widget stopped")
        except (OSError, subprocess.TimeoutExpired) as e:
            print(f"Error stopping web widget: {e}")
        web_process = None


def main(argv=None):
    parser = argparse.ArgumentParser(description=f"{config.APP_NAME} calculator")
    parser.add_argument("--web", action="store_true", help="also serve the browser widget")
    parser.add_argument("--dark", action="store_true", default=config.DARK_MODE,
                        help="start with the dark palette")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL)

    if args.web:
        start_web_server()
        atexit.register(cleanup_web_server)

    root = tk.Tk()
    CalculatorGUI(root, dark_mode=args.dark)
    root.mainloop()

    cleanup_web_server()


if __name__ == "__main__":
    main()
