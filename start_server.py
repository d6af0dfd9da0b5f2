#!/usr/bin/env python3
"""
Startup script for the Taskhub backend
This script starts the FastAPI server with the configured host/port
"""

import uvicorn
from taskhub.config.settings import Settings

def main():
    print("Starting Taskhub Backend Server...")
    print(f"Host: {Settings.HOST}")
    print(f"Port: {Settings.PORT}")
    print(f"Reload: {Settings.RELOAD}")
    print("=" * 50)

    uvicorn.run(
        "main:app",
        host=Settings.HOST,
        port=Settings.PORT,
        reload=Settings.RELOAD,
        log_level=Settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
