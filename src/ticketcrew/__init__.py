"""ticketcrew - multi-agent support ticket routing."""

__version__ = "0.1.0"
