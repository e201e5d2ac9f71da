"""Android Debug Bridge messages, sync transfers and device commands over a caller-supplied transport."""

__version__ = "2.1.14"