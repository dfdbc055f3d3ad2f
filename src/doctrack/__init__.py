"""DocTrack - office document routing and audit ledger."""

__version__ = "0.1.0"
