"""Self-contained network queries that do not spawn an external tool."""

from __future__ import annotations

import platform
import socket
from typing import Callable, Dict, List

import httpx
import psutil
import structlog

from ..config.settings import settings

logger = structlog.get_logger(__name__)

_FAMILY_LABELS = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def public_ip_info() -> str:
    """Fetch public IP and geo details from the configured lookup service."""
    url = settings.runner.public_ip_url
    logger.info("Querying public IP", url=url)
    response = httpx.get(url, timeout=settings.runner.http_timeout)
    response.raise_for_status()
    return f"--- Your Public IP Info ---\n{response.text}\n"


def local_interface_info() -> str:
    """Describe every local interface address plus the host platform."""
    lines: List[str] = ["--- Local Interface Details ---"]
    for name, addresses in sorted(psutil.net_if_addrs().items()):
        for address in addresses:
            family = _FAMILY_LABELS.get(address.family)
            if family is None:
                continue
            suffix = f"/{address.netmask}" if address.netmask else ""
            lines.append(f"Interface: {name} | {family} Address: {address.address}{suffix}")
    lines.append("")
    lines.append(f"Hostname: {socket.gethostname()}")
    lines.append(f"Running on {platform.system().lower()} ({platform.machine()})")
    return "\n".join(lines) + "\n"


LOCAL_QUERIES: Dict[str, Callable[[], str]] = {
    "public_ip": public_ip_info,
    "local_info": local_interface_info,
}
