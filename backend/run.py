#!/usr/bin/env python3
"""
Restaurant Grid Search Backend - Run Script
This script starts the FastAPI backend server
"""

import os
import sys
import subprocess
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def main():
    print_colored("🚀 Starting Restaurant Grid Search Backend...", "blue")

    check_file_exists(
        "restaurant_grid/main.py",
        "restaurant_grid/main.py not found. Please run this script from the backend directory.",
    )

    env_path = next((p for p in (Path(".env"), Path("../.env")) if p.exists()), None)
    if env_path is None and not os.environ.get("GOOGLE_MAPS_API_KEY"):
        print_colored("⚠️  Warning: no .env file and GOOGLE_MAPS_API_KEY is not set.", "yellow")
        print("Please create a .env file with the following variables:")
        print("  GOOGLE_MAPS_API_KEY=your_api_key_here")
        print("  CACHE_BACKEND=local            # memory, local or mongodb")
        print("  MONGO_URI=mongodb://localhost:27017")
        print("  LOGGER=20")
        sys.exit(1)

    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print("📍 Backend will be available at: http://localhost:8000")
    print("📍 API Health check: http://localhost:8000/health")
    print("📍 API Documentation: http://localhost:8000/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    # Run uvicorn with auto-reload for development
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "restaurant_grid.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8000"
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
