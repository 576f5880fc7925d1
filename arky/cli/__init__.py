"""
CLI Client Module.

Command-line client built with Typer for the Arky platform REST API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the platform
- CLI calls the platform via HTTP (httpx)
- One request per invocation, result printed as json, table or plain

Usage:
    arky --help
    arky node list --limit 5
    arky media upload photo.jpg
"""
