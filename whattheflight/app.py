#!/usr/bin/env python3
"""
What The Flight - Backend Application
Entry point for the WebSocket tracking service
"""

import asyncio
import sys

from whattheflight.websocket.server import main


def run() -> None:
    """Console script entry point."""
    print("What The Flight Backend - Starting...")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutting down gracefully...")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
