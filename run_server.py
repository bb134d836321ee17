#!/usr/bin/env python3
"""
Startup script for the Pizza Assist API.

Usage:
    # Run on the default host and port
    python run_server.py

    # Seed the classic menu into an empty catalog first
    python run_server.py --seed

    # Run with custom port and reload for development
    python run_server.py --port 8001 --reload
"""

import argparse
import os


def main():
    parser = argparse.ArgumentParser(
        description="Run the pizza assist API"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to run on (default: $PORT or 8000)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed the classic specials and toppings before starting",
    )

    args = parser.parse_args()

    if args.seed:
        from pizza_assist.seed_menu import seed_menu
        seed_menu()

    import uvicorn

    uvicorn.run(
        "pizza_assist.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
