#!/usr/bin/env python3
"""
Run the AssetVerse API under uvicorn.

Defaults come from assetverse.config.settings (HOST, PORT, RELOAD, LOG_LEVEL);
command line flags override them for a single run.
"""

import argparse

import uvicorn

from assetverse.config.settings import settings


def server_options(argv=None) -> dict:
    parser = argparse.ArgumentParser(description="Start the AssetVerse API")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", dest="reload", action="store_true", default=settings.RELOAD)
    parser.add_argument("--no-reload", dest="reload", action="store_false")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    args = parser.parse_args(argv)

    return {
        "host": args.host,
        "port": args.port,
        "reload": args.reload,
        "log_level": args.log_level.lower(),
    }


def main(argv=None):
    options = server_options(argv)
    database = settings.DATABASE_URL.split("@")[-1]
    print(f"🚀 AssetVerse API on http://{options['host']}:{options['port']} (db: {database}, reload: {options['reload']})")
    uvicorn.run("main:app", **options)


if __name__ == "__main__":
    main()
