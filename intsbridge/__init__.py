"""CDR encoding, message and topic data types, example option parsing and an AddTwoInts WebSocket service."""

__version__ = "0.1.0"