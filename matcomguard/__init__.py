"""Host guard for removable media, process resource use and open TCP ports."""

__version__ = "0.1.0"