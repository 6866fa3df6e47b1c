"""JSON output helpers for CLI commands.

Every command prints exactly one JSON envelope to stdout:

    {"success": true, "data": {...}, "error": null}
    {"success": false, "data": {"error_code": ..., ...}, "error": "message"}
"""

import json
import sys
from typing import Any, Dict, NoReturn, Optional

import click


def emit(payload: Dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def emit_success(data: Dict[str, Any]) -> None:
    """Print a success envelope."""
    emit({"success": True, "data": data, "error": None})


def emit_error(
    message: str,
    *,
    code: str,
    remediation: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> NoReturn:
    """Print an error envelope and exit with status 1."""
    data: Dict[str, Any] = {"error_code": code}
    if remediation:
        data["remediation"] = remediation
    if details:
        data["details"] = details
    emit({"success": False, "data": data, "error": message})
    sys.exit(1)


def emit_failure(envelope: Dict[str, Any]) -> NoReturn:
    """Print a prepared error envelope (see ``error_to_response``) and exit 1."""
    emit(envelope)
    sys.exit(1)
