#!/usr/bin/env python3
"""
Simple run script for the Workflow Designer service.

Usage:
    python run.py
    
Or with custom settings:
    HOST=127.0.0.1 PORT=8080 python run.py
"""

import uvicorn
import os


def main():
    """Run the FastAPI application."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"
    base_url = f"http://{host}:{port}"
    
    print(f"""
╔═══════════════════════════════════════════════════════════════╗
║                    Workflow Designer                          ║
║                                                               ║
║  Validation and simulation for HR workflows                   ║
╠═══════════════════════════════════════════════════════════════╣
║  Server:    {base_url:<50}║
║  API Docs:  {base_url + "/docs":<50}║
║  ReDoc:     {base_url + "/redoc":<50}║
╠═══════════════════════════════════════════════════════════════╣
║  Demo workflow ID: onboarding-demo                            ║
╚═══════════════════════════════════════════════════════════════╝
    """)
    
    uvicorn.run(
        "designer.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
