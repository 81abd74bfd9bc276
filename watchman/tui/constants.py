"""The Watchman TUI constants."""

TITLE = "The Watchman"
SUBTITLE = "Network Security Scanner"
COMPACT_HEADER = "THE WATCHMAN - Network Security Scanner"

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

BANNER = """\
╔════════════════════════════════════════════════════════════════╗
║                                                                ║
║            ████████╗██╗  ██╗███████╗                           ║
║            ╚══██╔══╝██║  ██║██╔════╝                           ║
║               ██║   ███████║█████╗                             ║
║               ██║   ██╔══██║██╔══╝                             ║
║               ██║   ██║  ██║███████╗                           ║
║               ╚═╝   ╚═╝  ╚═╝╚══════╝                           ║
║                                                                ║
║        ██╗    ██╗ █████╗ ████████╗ ██████╗██╗  ██╗             ║
║        ██║    ██║██╔══██╗╚══██╔══╝██╔════╝██║  ██║             ║
║        ██║ █╗ ██║███████║   ██║   ██║     ███████║             ║
║        ██║███╗██║██╔══██║   ██║   ██║     ██╔══██║             ║
║        ╚███╔███╔╝██║  ██║   ██║   ╚██████╗██║  ██║             ║
║         ╚══╝╚══╝ ╚═╝  ╚═╝   ╚═╝    ╚═════╝╚═╝  ╚═╝             ║
║                 M A N                                          ║
║                                                                ║
║               Network Security Scanner                         ║
║                                                                ║
╚════════════════════════════════════════════════════════════════╝"""

# Rich markup colors per status level.
STATUS_COLORS = {
    "info": "#89E051",
    "success": "#4ECDC4",
    "error": "#FF6B6B",
}

COLOR_PRIMARY = "#00CED1"
COLOR_SECONDARY = "#F6D2A2"
COLOR_ACCENT = "#89E051"
COLOR_ERROR = "#FF6B6B"
COLOR_SUCCESS = "#4ECDC4"
