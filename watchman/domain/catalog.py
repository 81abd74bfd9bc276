"""Canonical diagnostic-action registry."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Tuple

PARAMETER_PLACEHOLDER = "{parameter}"


class ActionKind(str, Enum):
    """How an action is executed."""

    SUBPROCESS = "subprocess"
    LOCAL_QUERY = "local_query"


@dataclass(frozen=True)
class ActionDescriptor:
    """Immutable metadata for one selectable diagnostic action."""

    id: int
    name: str
    description: str
    invocation: str
    kind: ActionKind = ActionKind.SUBPROCESS
    program: str = "nmap"
    elevated: bool = False
    requires_target: bool = True
    requires_parameter: bool = False
    parameter_label: str = ""
    parameter_placeholder: str = ""

    def render_invocation(self, parameter: str = "") -> str:
        """Return the invocation with the parameter placeholder filled in."""
        if PARAMETER_PLACEHOLDER not in self.invocation:
            return self.invocation
        return self.invocation.replace(PARAMETER_PLACEHOLDER, parameter)

    def with_parameter(self, parameter: str) -> "ActionDescriptor":
        """Copy of this action whose invocation embeds ``parameter``."""
        return replace(self, invocation=self.render_invocation(parameter))


def _nmap(
    action_id: int,
    name: str,
    description: str,
    invocation: str,
    *,
    elevated: bool = False,
) -> ActionDescriptor:
    return ActionDescriptor(
        id=action_id,
        name=name,
        description=description,
        invocation=invocation,
        elevated=elevated,
    )


ACTION_CATALOG: Tuple[ActionDescriptor, ...] = (
    _nmap(1, "Local Discovery", "Simple ping sweep of the network", "-sn"),
    _nmap(2, "Hell Scan (Full)", "Checks every single port (1-65535)", "-p-"),
    _nmap(3, "Quick Check", "Top 100 common ports only", "--top-ports 100"),
    ActionDescriptor(
        id=4,
        name="Custom Range",
        description="You pick the ports",
        invocation=f"-p {PARAMETER_PLACEHOLDER}",
        requires_parameter=True,
        parameter_label="Which ports?",
        parameter_placeholder="Enter ports (e.g., 80,443 or 1-1000)",
    ),
    _nmap(5, "Service Versions", "What software is actually running?", "-sV"),
    _nmap(6, "OS Detection", "Guesses what OS the target has", "-O", elevated=True),
    _nmap(
        7,
        "Total Takedown",
        "Aggressive scan with everything enabled",
        "-A",
        elevated=True,
    ),
    _nmap(8, "Vuln Finder", "Standard vulnerability scripts", "--script vuln"),
    _nmap(9, "UDP Hunt", "Scanning for those tricky UDP ports", "-sU", elevated=True),
    _nmap(10, "Firewall Proofing", "ACK scan to see if there's a firewall", "-sA"),
    _nmap(11, "Path Tracer", "See the hops to the target", "--traceroute"),
    ActionDescriptor(
        id=12,
        name="My Public IP",
        description="Geo-info and public IP details",
        invocation="public_ip",
        kind=ActionKind.LOCAL_QUERY,
        program="",
        requires_target=False,
    ),
    ActionDescriptor(
        id=13,
        name="Local Network Info",
        description="Local IPs, DNS, and interface list",
        invocation="local_info",
        kind=ActionKind.LOCAL_QUERY,
        program="",
        requires_target=False,
    ),
    _nmap(14, "Fast Mode", "Default nmap but faster", "-F"),
    _nmap(15, "Ping Only", "Check if the host is even alive", "-sP"),
    _nmap(
        16,
        "Web Titles",
        "Grabs HTTP headers and page titles",
        "--script http-title,http-headers",
    ),
    _nmap(
        17,
        "SSL/TLS Check",
        "Certificates and cipher suites audit",
        "--script ssl-cert,ssl-enum-ciphers",
    ),
    _nmap(18, "SMB OS Guess", "Detailed OS info via SMB", "--script smb-os-discovery"),
    _nmap(19, "DNS Brute", "Try to guess subdomains", "--script dns-brute"),
    _nmap(20, "SSH Audit", "Check for weak SSH ciphers", "--script ssh2-enum-algos"),
    _nmap(
        21,
        "DB Hunt",
        "Search for MySQL, Postgres, Redis, etc.",
        "-p 3306,5432,6379,27017,1433",
    ),
    _nmap(
        22,
        "Banner Grabber",
        "Grab service banners for identification",
        "-sV --script banner",
    ),
    _nmap(23, "No DNS Resolving", "Fast scan without resolving names", "-n"),
    _nmap(24, "Sneaky Scan", "Slow timing (T2) to avoid detection", "-T2"),
    _nmap(25, "Protocol Scan", "See what IP protocols are supported", "-sO", elevated=True),
    _nmap(26, "SCTP Init Scan", "Specific for SCTP protocol", "-sY"),
    _nmap(27, "FIN Scan", "Stealth scan (FIN packet)", "-sF"),
    _nmap(28, "XMAS Scan", "Stealth scan (FIN, PSH, URG lights)", "-sX"),
    _nmap(29, "Null Scan", "Stealth scan (no flags set)", "-sN"),
    _nmap(30, "Fragmented Test", "Firewall test using fragmented packets", "-f"),
    _nmap(31, "MTU Test", "Test firewall with specific MTU sizes", "--mtu 24"),
    _nmap(32, "Source Port 53", "Spoof as DNS traffic to bypass filters", "--source-port 53"),
    _nmap(33, "Bad Checksum", "Test if packets are dropped by firewall", "--badsum"),
    _nmap(34, "Heartbleed Trip", "Check for the classic OpenSSL bug", "--script ssl-heartbleed"),
    ActionDescriptor(
        id=35,
        name="Whois Lookup",
        description="Simple whois info for the domain",
        invocation="",
        program="whois",
    ),
)

ACTION_MAP: Dict[int, ActionDescriptor] = {action.id: action for action in ACTION_CATALOG}


def get_action(action_id: int) -> ActionDescriptor:
    """Return the action registered under ``action_id``."""
    try:
        return ACTION_MAP[action_id]
    except KeyError:
        raise KeyError(f"Unknown action id {action_id}") from None


def find_action(name: str) -> ActionDescriptor:
    """Look up an action by display name, case-insensitively."""
    wanted = name.strip().lower()
    for action in ACTION_CATALOG:
        if action.name.lower() == wanted:
            return action
    raise KeyError(f"Unknown action '{name}'")


def required_programs(
    catalog: Tuple[ActionDescriptor, ...] = ACTION_CATALOG,
) -> Tuple[str, ...]:
    """Distinct external programs used by subprocess actions, in catalog order."""
    seen: Dict[str, None] = {}
    for action in catalog:
        if action.kind is ActionKind.SUBPROCESS and action.program:
            seen.setdefault(action.program, None)
    return tuple(seen)
